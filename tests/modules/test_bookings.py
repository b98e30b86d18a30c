import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from shareit.server.modules.bookings import models_bookings
from shareit.server.modules.items import models_items
from shareit.server.modules.users import models_users
from shareit.types.bookings_type import BookingStatus
from tests.commons import (
    create_booking,
    create_item,
    create_user,
    days_from_now,
    sharer,
)

owner: models_users.User
booker: models_users.User
stranger: models_users.User

item: models_items.Item
unavailable_item: models_items.Item

past_booking: models_bookings.Booking
current_booking: models_bookings.Booking
future_booking: models_bookings.Booking
rejected_booking: models_bookings.Booking
booking_to_approve: models_bookings.Booking
booking_to_reject: models_bookings.Booking


@pytest_asyncio.fixture(scope="module", autouse=True)
async def init_objects() -> None:
    global owner, booker, stranger, item, unavailable_item
    global past_booking, current_booking, future_booking, rejected_booking
    global booking_to_approve, booking_to_reject

    owner = await create_user(name="Owner", email="owner@shareit.test")
    booker = await create_user(name="Booker", email="booker@shareit.test")
    stranger = await create_user(name="Stranger", email="stranger@shareit.test")

    item = await create_item(owner=owner, name="Kayak", description="Two seats")
    unavailable_item = await create_item(
        owner=owner,
        name="Canoe",
        description="Leaking",
        available=False,
    )

    past_booking = await create_booking(
        item=item,
        booker=booker,
        start=days_from_now(-5),
        end=days_from_now(-4),
        status=BookingStatus.APPROVED,
    )
    current_booking = await create_booking(
        item=item,
        booker=booker,
        start=days_from_now(-1),
        end=days_from_now(1),
        status=BookingStatus.APPROVED,
    )
    future_booking = await create_booking(
        item=item,
        booker=booker,
        start=days_from_now(10),
        end=days_from_now(11),
    )
    rejected_booking = await create_booking(
        item=item,
        booker=booker,
        start=days_from_now(20),
        end=days_from_now(21),
        status=BookingStatus.REJECTED,
    )
    booking_to_approve = await create_booking(
        item=item,
        booker=stranger,
        start=days_from_now(30),
        end=days_from_now(31),
    )
    booking_to_reject = await create_booking(
        item=item,
        booker=stranger,
        start=days_from_now(40),
        end=days_from_now(41),
    )


def test_create_booking(client: TestClient) -> None:
    response = client.post(
        "/bookings",
        json={
            "itemId": item.id,
            "start": days_from_now(50).isoformat(),
            "end": days_from_now(51).isoformat(),
        },
        headers=sharer(stranger),
    )
    assert response.status_code == 201
    json = response.json()
    assert json["status"] == "WAITING"
    assert json["item"] == {"id": item.id, "name": "Kayak"}
    assert json["booker"] == {"id": stranger.id, "name": "Stranger"}


def test_create_booking_with_naive_datetimes(client: TestClient) -> None:
    response = client.post(
        "/bookings",
        json={
            "itemId": item.id,
            "start": "2100-01-01T10:00:00",
            "end": "2100-01-02T10:00:00",
        },
        headers=sharer(stranger),
    )
    assert response.status_code == 201
    assert response.json()["start"].startswith("2100-01-01T10:00:00")


def test_create_booking_of_own_item(client: TestClient) -> None:
    response = client.post(
        "/bookings",
        json={
            "itemId": item.id,
            "start": days_from_now(50).isoformat(),
            "end": days_from_now(51).isoformat(),
        },
        headers=sharer(owner),
    )
    assert response.status_code == 404


def test_create_booking_of_unavailable_item(client: TestClient) -> None:
    response = client.post(
        "/bookings",
        json={
            "itemId": unavailable_item.id,
            "start": days_from_now(50).isoformat(),
            "end": days_from_now(51).isoformat(),
        },
        headers=sharer(booker),
    )
    assert response.status_code == 400


def test_create_booking_of_missing_item(client: TestClient) -> None:
    response = client.post(
        "/bookings",
        json={
            "itemId": 9999,
            "start": days_from_now(50).isoformat(),
            "end": days_from_now(51).isoformat(),
        },
        headers=sharer(booker),
    )
    assert response.status_code == 404


def test_create_booking_ending_before_start(client: TestClient) -> None:
    response = client.post(
        "/bookings",
        json={
            "itemId": item.id,
            "start": days_from_now(51).isoformat(),
            "end": days_from_now(50).isoformat(),
        },
        headers=sharer(booker),
    )
    assert response.status_code == 400


def test_approve_booking_by_booker(client: TestClient) -> None:
    response = client.patch(
        f"/bookings/{booking_to_approve.id}",
        params={"approved": "true"},
        headers=sharer(stranger),
    )
    assert response.status_code == 400


def test_approve_booking(client: TestClient) -> None:
    response = client.patch(
        f"/bookings/{booking_to_approve.id}",
        params={"approved": "true"},
        headers=sharer(owner),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "APPROVED"


def test_approve_booking_twice(client: TestClient) -> None:
    response = client.patch(
        f"/bookings/{booking_to_approve.id}",
        params={"approved": "false"},
        headers=sharer(owner),
    )
    assert response.status_code == 400


def test_reject_booking(client: TestClient) -> None:
    response = client.patch(
        f"/bookings/{booking_to_reject.id}",
        params={"approved": "false"},
        headers=sharer(owner),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "REJECTED"


def test_approve_missing_booking(client: TestClient) -> None:
    response = client.patch(
        "/bookings/9999",
        params={"approved": "true"},
        headers=sharer(owner),
    )
    assert response.status_code == 404


def test_read_booking_as_booker_and_owner(client: TestClient) -> None:
    for user in (booker, owner):
        response = client.get(f"/bookings/{past_booking.id}", headers=sharer(user))
        assert response.status_code == 200
        assert response.json()["id"] == past_booking.id


def test_read_booking_as_stranger(client: TestClient) -> None:
    response = client.get(f"/bookings/{past_booking.id}", headers=sharer(stranger))
    assert response.status_code == 404


@pytest.mark.parametrize(
    ("state", "expected"),
    [
        ("ALL", ["rejected", "future", "current", "past"]),
        ("current", ["current"]),
        ("PAST", ["past"]),
        ("FUTURE", ["rejected", "future"]),
        ("WAITING", ["future"]),
        ("REJECTED", ["rejected"]),
    ],
)
def test_read_user_bookings_by_state(
    state: str,
    expected: list[str],
    client: TestClient,
) -> None:
    bookings = {
        "past": past_booking,
        "current": current_booking,
        "future": future_booking,
        "rejected": rejected_booking,
    }
    response = client.get(
        "/bookings",
        params={"state": state},
        headers=sharer(booker),
    )
    assert response.status_code == 200
    assert [booking["id"] for booking in response.json()] == [
        bookings[name].id for name in expected
    ]


def test_read_user_bookings_default_state(client: TestClient) -> None:
    response = client.get("/bookings", headers=sharer(booker))
    assert response.status_code == 200
    assert len(response.json()) == 4


def test_read_user_bookings_with_unknown_state(client: TestClient) -> None:
    response = client.get(
        "/bookings",
        params={"state": "UNSUPPORTED_STATUS"},
        headers=sharer(booker),
    )
    assert response.status_code == 400


def test_read_user_bookings_of_missing_user(client: TestClient) -> None:
    response = client.get("/bookings", headers=sharer(9999))
    assert response.status_code == 404


def test_read_owner_bookings(client: TestClient) -> None:
    response = client.get(
        "/bookings/owner",
        params={"state": "CURRENT"},
        headers=sharer(owner),
    )
    assert response.status_code == 200
    assert [booking["id"] for booking in response.json()] == [current_booking.id]


def test_read_owner_bookings_are_sorted(client: TestClient) -> None:
    response = client.get("/bookings/owner", headers=sharer(owner))
    assert response.status_code == 200
    starts = [booking["start"] for booking in response.json()]
    assert starts == sorted(starts, reverse=True)


def test_read_owner_bookings_of_user_without_items(client: TestClient) -> None:
    response = client.get("/bookings/owner", headers=sharer(booker))
    assert response.status_code == 200
    assert response.json() == []
