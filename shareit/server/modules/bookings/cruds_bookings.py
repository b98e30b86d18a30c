"""File defining the functions called by the endpoints, making queries to the table using the models"""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import Select, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.bookings import models_bookings
from shareit.server.modules.items import models_items
from shareit.types.bookings_type import BookingState, BookingStatus


def filter_by_state(
    query: Select[tuple[models_bookings.Booking]],
    state: BookingState,
    now: datetime,
) -> Select[tuple[models_bookings.Booking]]:
    """
    Restrict a booking query to the bookings matching `state` at the instant `now`
    """
    match state:
        case BookingState.CURRENT:
            return query.where(
                models_bookings.Booking.start < now,
                models_bookings.Booking.end > now,
            )
        case BookingState.PAST:
            return query.where(models_bookings.Booking.end < now)
        case BookingState.FUTURE:
            return query.where(models_bookings.Booking.start > now)
        case BookingState.WAITING:
            return query.where(
                models_bookings.Booking.status == BookingStatus.WAITING,
            )
        case BookingState.REJECTED:
            return query.where(
                models_bookings.Booking.status == BookingStatus.REJECTED,
            )
    return query


async def get_booking_by_id(
    db: AsyncSession,
    booking_id: int,
) -> models_bookings.Booking | None:
    result = await db.execute(
        select(models_bookings.Booking)
        .where(models_bookings.Booking.id == booking_id)
        .execution_options(populate_existing=True),
    )
    return result.scalars().first()


async def get_bookings_by_booker_id(
    db: AsyncSession,
    booker_id: int,
    state: BookingState,
    now: datetime,
) -> Sequence[models_bookings.Booking]:
    """Return the bookings made by a user, latest start first"""

    query = select(models_bookings.Booking).where(
        models_bookings.Booking.booker_id == booker_id,
    )
    result = await db.execute(
        filter_by_state(query, state=state, now=now).order_by(
            models_bookings.Booking.start.desc(),
        ),
    )
    return result.scalars().all()


async def get_bookings_by_owner_id(
    db: AsyncSession,
    owner_id: int,
    state: BookingState,
    now: datetime,
) -> Sequence[models_bookings.Booking]:
    """Return the bookings of the items owned by a user, latest start first"""

    owned_item_ids = select(models_items.Item.id).where(
        models_items.Item.owner_id == owner_id,
    )
    query = select(models_bookings.Booking).where(
        models_bookings.Booking.item_id.in_(owned_item_ids),
    )
    result = await db.execute(
        filter_by_state(query, state=state, now=now).order_by(
            models_bookings.Booking.start.desc(),
        ),
    )
    return result.scalars().all()


async def get_last_booking(
    db: AsyncSession,
    item_id: int,
    now: datetime,
) -> models_bookings.Booking | None:
    """Return the approved booking of the item which ended most recently"""

    result = await db.execute(
        select(models_bookings.Booking)
        .where(
            models_bookings.Booking.item_id == item_id,
            models_bookings.Booking.status == BookingStatus.APPROVED,
            models_bookings.Booking.end < now,
        )
        .order_by(models_bookings.Booking.end.desc())
        .limit(1),
    )
    return result.scalars().first()


async def get_next_booking(
    db: AsyncSession,
    item_id: int,
    now: datetime,
) -> models_bookings.Booking | None:
    """Return the approved booking of the item which starts the soonest"""

    result = await db.execute(
        select(models_bookings.Booking)
        .where(
            models_bookings.Booking.item_id == item_id,
            models_bookings.Booking.status == BookingStatus.APPROVED,
            models_bookings.Booking.start > now,
        )
        .order_by(models_bookings.Booking.start)
        .limit(1),
    )
    return result.scalars().first()


async def has_completed_booking(
    db: AsyncSession,
    item_id: int,
    booker_id: int,
    now: datetime,
) -> bool:
    """Check that the user rented the item and that the rental is over"""

    result = await db.execute(
        select(models_bookings.Booking.id)
        .where(
            models_bookings.Booking.item_id == item_id,
            models_bookings.Booking.booker_id == booker_id,
            models_bookings.Booking.status == BookingStatus.APPROVED,
            models_bookings.Booking.end < now,
        )
        .limit(1),
    )
    return result.scalars().first() is not None


async def create_booking(
    db: AsyncSession,
    booking: models_bookings.Booking,
) -> None:
    db.add(booking)
    await db.flush()


async def update_booking_status(
    db: AsyncSession,
    booking_id: int,
    status: BookingStatus,
) -> None:
    await db.execute(
        update(models_bookings.Booking)
        .where(models_bookings.Booking.id == booking_id)
        .values(status=status),
    )
    await db.flush()


async def delete_bookings_by_user_id(
    db: AsyncSession,
    user_id: int,
) -> None:
    """Delete the bookings made by the user and the bookings of the user's items"""

    owned_item_ids = select(models_items.Item.id).where(
        models_items.Item.owner_id == user_id,
    )
    await db.execute(
        delete(models_bookings.Booking).where(
            or_(
                models_bookings.Booking.booker_id == user_id,
                models_bookings.Booking.item_id.in_(owned_item_ids),
            ),
        ),
    )
    await db.flush()
