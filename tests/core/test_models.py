import logging
from pathlib import Path

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from shareit.server.app import init_db
from shareit.server.modules.bookings import models_bookings
from shareit.server.modules.users import models_users
from shareit.types.bookings_type import BookingStatus
from tests.commons import days_from_now


@pytest.mark.asyncio
async def test_init_db_creates_every_table(tmp_path: Path) -> None:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}")
    try:
        await init_db(
            engine=engine,
            shareit_error_logger=logging.getLogger("shareit.error"),
            drop_db=True,
        )
        async with engine.connect() as conn:
            table_names = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names(),
            )
    finally:
        await engine.dispose()

    assert set(table_names) == {"user", "item", "comment", "booking", "item_request"}


def test_models_are_built_without_id() -> None:
    user = models_users.User(name="Alice", email="alice@shareit.test")
    booking = models_bookings.Booking(
        start=days_from_now(1),
        end=days_from_now(2),
        item_id=1,
        booker_id=2,
        status=BookingStatus.WAITING,
    )

    assert user.name == "Alice"
    assert booking.status == BookingStatus.WAITING
