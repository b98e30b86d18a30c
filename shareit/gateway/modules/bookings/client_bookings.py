import httpx
from fastapi import Depends, Response

from shareit.gateway.client import BaseClient
from shareit.gateway.dependencies import get_http_client, get_request_id
from shareit.gateway.modules.bookings import schemas_bookings
from shareit.types.bookings_type import BookingState


class BookingsClient(BaseClient):
    async def create_booking(
        self,
        user_id: int,
        booking: schemas_bookings.BookingCreate,
    ) -> Response:
        return await self.post(
            "/bookings",
            body=booking.model_dump(by_alias=True, mode="json"),
            user_id=user_id,
        )

    async def approve_booking(
        self,
        user_id: int,
        booking_id: int,
        approved: bool,
    ) -> Response:
        return await self.patch(
            f"/bookings/{booking_id}",
            user_id=user_id,
            params={"approved": str(approved).lower()},
        )

    async def get_booking(self, user_id: int, booking_id: int) -> Response:
        return await self.get(f"/bookings/{booking_id}", user_id=user_id)

    async def get_user_bookings(self, user_id: int, state: BookingState) -> Response:
        return await self.get(
            "/bookings",
            user_id=user_id,
            params={"state": state.value},
        )

    async def get_owner_bookings(self, user_id: int, state: BookingState) -> Response:
        return await self.get(
            "/bookings/owner",
            user_id=user_id,
            params={"state": state.value},
        )


def get_bookings_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    request_id: str = Depends(get_request_id),
) -> BookingsClient:
    return BookingsClient(http_client=http_client, request_id=request_id)
