from fastapi import Depends, HTTPException, Query

from shareit.gateway.dependencies import get_sharer_user_id
from shareit.gateway.modules.bookings import schemas_bookings
from shareit.gateway.modules.bookings.client_bookings import (
    BookingsClient,
    get_bookings_client,
)
from shareit.types.bookings_type import BookingState
from shareit.types.module import Module

module = Module(
    root="bookings",
    tag="Bookings",
)


def get_booking_state(
    state: str = Query(default=BookingState.ALL.value),
) -> BookingState:
    """
    Parse the `state` query parameter, ignoring case
    """
    booking_state = BookingState.from_string(state)
    if booking_state is None:
        raise HTTPException(status_code=400, detail=f"Unknown state: {state}")
    return booking_state


@module.router.post("/bookings")
async def create_booking(
    booking: schemas_bookings.BookingCreate,
    user_id: int = Depends(get_sharer_user_id),
    client: BookingsClient = Depends(get_bookings_client),
):
    return await client.create_booking(user_id=user_id, booking=booking)


@module.router.patch("/bookings/{booking_id}")
async def approve_booking(
    booking_id: int,
    approved: bool = Query(),
    user_id: int = Depends(get_sharer_user_id),
    client: BookingsClient = Depends(get_bookings_client),
):
    return await client.approve_booking(
        user_id=user_id,
        booking_id=booking_id,
        approved=approved,
    )


@module.router.get("/bookings/owner")
async def read_owner_bookings(
    state: BookingState = Depends(get_booking_state),
    user_id: int = Depends(get_sharer_user_id),
    client: BookingsClient = Depends(get_bookings_client),
):
    return await client.get_owner_bookings(user_id=user_id, state=state)


@module.router.get("/bookings")
async def read_user_bookings(
    state: BookingState = Depends(get_booking_state),
    user_id: int = Depends(get_sharer_user_id),
    client: BookingsClient = Depends(get_bookings_client),
):
    return await client.get_user_bookings(user_id=user_id, state=state)


@module.router.get("/bookings/{booking_id}")
async def read_booking(
    booking_id: int,
    user_id: int = Depends(get_sharer_user_id),
    client: BookingsClient = Depends(get_bookings_client),
):
    return await client.get_booking(user_id=user_id, booking_id=booking_id)
