from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.items import models_items
from shareit.server.modules.requests import models_requests


async def get_request_by_id(
    db: AsyncSession,
    request_id: int,
) -> models_requests.ItemRequest | None:
    result = await db.execute(
        select(models_requests.ItemRequest)
        .where(models_requests.ItemRequest.id == request_id)
        .execution_options(populate_existing=True),
    )
    return result.scalars().first()


async def get_requests_by_requestor_id(
    db: AsyncSession,
    requestor_id: int,
) -> Sequence[models_requests.ItemRequest]:
    """Return the requests of a user, newest first"""

    result = await db.execute(
        select(models_requests.ItemRequest)
        .where(models_requests.ItemRequest.requestor_id == requestor_id)
        .order_by(
            models_requests.ItemRequest.created.desc(),
            models_requests.ItemRequest.id.desc(),
        ),
    )
    return result.scalars().all()


async def get_requests_of_other_users(
    db: AsyncSession,
    user_id: int,
) -> Sequence[models_requests.ItemRequest]:
    """Return the requests made by everyone but `user_id`, newest first"""

    result = await db.execute(
        select(models_requests.ItemRequest)
        .where(models_requests.ItemRequest.requestor_id != user_id)
        .order_by(
            models_requests.ItemRequest.created.desc(),
            models_requests.ItemRequest.id.desc(),
        ),
    )
    return result.scalars().all()


async def create_request(
    db: AsyncSession,
    request: models_requests.ItemRequest,
) -> None:
    db.add(request)
    await db.flush()


async def delete_requests_by_requestor_id(
    db: AsyncSession,
    requestor_id: int,
) -> None:
    """Delete the requests of a user. Items answering them are kept and detached from the requests."""

    request_ids = select(models_requests.ItemRequest.id).where(
        models_requests.ItemRequest.requestor_id == requestor_id,
    )
    await db.execute(
        update(models_items.Item)
        .where(models_items.Item.request_id.in_(request_ids))
        .values(request_id=None),
    )
    await db.execute(
        delete(models_requests.ItemRequest).where(
            models_requests.ItemRequest.requestor_id == requestor_id,
        ),
    )
    await db.flush()
