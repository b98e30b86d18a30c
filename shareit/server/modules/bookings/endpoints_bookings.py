import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.dependencies import get_db, get_sharer_user, get_sharer_user_id
from shareit.server.modules.bookings import (
    cruds_bookings,
    models_bookings,
    schemas_bookings,
)
from shareit.server.modules.bookings.user_deleter_bookings import (
    BookingsUserDeleter,
)
from shareit.server.modules.items import cruds_items
from shareit.server.modules.users import models_users
from shareit.types.bookings_type import BookingState, BookingStatus
from shareit.types.module import Module

module = Module(
    root="bookings",
    tag="Bookings",
    user_deleter=BookingsUserDeleter(),
)


shareit_error_logger = logging.getLogger("shareit.error")


def parse_state(state: str) -> BookingState:
    booking_state = BookingState.from_string(state)
    if booking_state is None:
        raise HTTPException(status_code=400, detail=f"Unknown state: {state}")
    return booking_state


@module.router.post(
    "/bookings",
    response_model=schemas_bookings.Booking,
    status_code=201,
)
async def create_booking(
    booking: schemas_bookings.BookingBase,
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
):
    """
    Book an item for a time window. The booking waits for the approval of the item owner.
    """
    item = await cruds_items.get_item_by_id(db=db, item_id=booking.item_id)
    if item is None:
        raise HTTPException(
            status_code=404,
            detail=f"Item {booking.item_id} not found",
        )
    # Owners can not book their own items, the item is hidden from them
    if item.owner_id == user.id:
        raise HTTPException(
            status_code=404,
            detail=f"Item {booking.item_id} not found",
        )
    if not item.available:
        raise HTTPException(
            status_code=400,
            detail=f"Item {booking.item_id} is not available",
        )

    db_booking = models_bookings.Booking(
        start=booking.start,
        end=booking.end,
        item_id=item.id,
        booker_id=user.id,
        status=BookingStatus.WAITING,
    )
    await cruds_bookings.create_booking(db=db, booking=db_booking)

    return await cruds_bookings.get_booking_by_id(db=db, booking_id=db_booking.id)


@module.router.patch(
    "/bookings/{booking_id}",
    response_model=schemas_bookings.Booking,
    status_code=200,
)
async def approve_booking(
    booking_id: int,
    approved: bool = Query(),
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_sharer_user_id),
):
    """
    Approve or reject a waiting booking.

    **Only the owner of the booked item can use this endpoint**
    """
    booking = await cruds_bookings.get_booking_by_id(db=db, booking_id=booking_id)
    if booking is None:
        raise HTTPException(
            status_code=404,
            detail=f"Booking {booking_id} not found",
        )
    if booking.item.owner_id != user_id:
        raise HTTPException(
            status_code=400,
            detail=f"User {user_id} is not the owner of item {booking.item_id}",
        )
    if booking.status != BookingStatus.WAITING:
        raise HTTPException(
            status_code=400,
            detail=f"Booking {booking_id} was already {booking.status.value}",
        )

    status = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
    await cruds_bookings.update_booking_status(
        db=db,
        booking_id=booking_id,
        status=status,
    )
    shareit_error_logger.info(f"Booking {booking_id} set to {status} by {user_id}")

    return await cruds_bookings.get_booking_by_id(db=db, booking_id=booking_id)


@module.router.get(
    "/bookings/owner",
    response_model=list[schemas_bookings.Booking],
    status_code=200,
)
async def read_owner_bookings(
    state: str = Query(default=BookingState.ALL.value),
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
) -> Sequence[models_bookings.Booking]:
    """
    Return the bookings of the items of the user, latest start first.

    `state` may be `ALL`, `CURRENT`, `PAST`, `FUTURE`, `WAITING` or `REJECTED`.
    """
    return await cruds_bookings.get_bookings_by_owner_id(
        db=db,
        owner_id=user.id,
        state=parse_state(state),
        now=datetime.now(UTC),
    )


@module.router.get(
    "/bookings",
    response_model=list[schemas_bookings.Booking],
    status_code=200,
)
async def read_user_bookings(
    state: str = Query(default=BookingState.ALL.value),
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
) -> Sequence[models_bookings.Booking]:
    """
    Return the bookings made by the user, latest start first.

    `state` may be `ALL`, `CURRENT`, `PAST`, `FUTURE`, `WAITING` or `REJECTED`.
    """
    return await cruds_bookings.get_bookings_by_booker_id(
        db=db,
        booker_id=user.id,
        state=parse_state(state),
        now=datetime.now(UTC),
    )


@module.router.get(
    "/bookings/{booking_id}",
    response_model=schemas_bookings.Booking,
    status_code=200,
)
async def read_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_sharer_user_id),
):
    """
    Return a booking. Only the booker and the owner of the item can see it.
    """
    booking = await cruds_bookings.get_booking_by_id(db=db, booking_id=booking_id)
    if booking is None or user_id not in (booking.booker_id, booking.item.owner_id):
        raise HTTPException(
            status_code=404,
            detail=f"Booking {booking_id} not found",
        )

    return booking
