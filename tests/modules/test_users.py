import pytest_asyncio
from fastapi.testclient import TestClient

from shareit.server.modules.items import models_items
from shareit.server.modules.requests import models_requests
from shareit.server.modules.users import models_users
from shareit.types.bookings_type import BookingStatus
from tests.commons import (
    add_object_to_db,
    create_booking,
    create_item,
    create_user,
    days_from_now,
    sharer,
)

user: models_users.User
other_user: models_users.User
user_to_delete: models_users.User
borrower: models_users.User

commented_item: models_items.Item
request_of_deleted_user: models_requests.ItemRequest
answering_item: models_items.Item


@pytest_asyncio.fixture(scope="module", autouse=True)
async def init_objects() -> None:
    global user, other_user, user_to_delete, borrower
    global commented_item, request_of_deleted_user, answering_item

    user = await create_user(name="Alice", email="alice@shareit.test")
    other_user = await create_user(name="Bob", email="bob@shareit.test")
    user_to_delete = await create_user(name="Carol", email="carol@shareit.test")
    borrower = await create_user(name="Dave", email="dave@shareit.test")

    item = await create_item(owner=user_to_delete)
    await create_booking(
        item=item,
        booker=borrower,
        start=days_from_now(1),
        end=days_from_now(2),
    )

    # Carol rented one of Alice's items and commented it
    commented_item = await create_item(owner=user, name="Ladder")
    await create_booking(
        item=commented_item,
        booker=user_to_delete,
        start=days_from_now(-5),
        end=days_from_now(-4),
        status=BookingStatus.APPROVED,
    )
    await add_object_to_db(
        models_items.Comment(
            text="Tall enough",
            item_id=commented_item.id,
            author_id=user_to_delete.id,
            created=days_from_now(-3),
        ),
    )

    # Alice listed an item answering a request of Carol
    request_of_deleted_user = models_requests.ItemRequest(
        description="I need a tent",
        requestor_id=user_to_delete.id,
        created=days_from_now(-10),
    )
    await add_object_to_db(request_of_deleted_user)
    answering_item = await create_item(
        owner=user,
        name="Tent",
        request_id=request_of_deleted_user.id,
    )


def test_create_user(client: TestClient) -> None:
    response = client.post(
        "/users",
        json={"name": "Eve", "email": "Eve@ShareIt.test"},
    )
    assert response.status_code == 201
    json = response.json()
    assert json["id"] > 0
    assert json["name"] == "Eve"
    assert json["email"] == "eve@shareit.test"


def test_create_user_with_used_email(client: TestClient) -> None:
    response = client.post(
        "/users",
        json={"name": "Alice bis", "email": "alice@shareit.test"},
    )
    assert response.status_code == 409


def test_read_user(client: TestClient) -> None:
    response = client.get(f"/users/{user.id}")
    assert response.status_code == 200
    assert response.json() == {
        "id": user.id,
        "name": "Alice",
        "email": "alice@shareit.test",
    }


def test_read_missing_user(client: TestClient) -> None:
    response = client.get("/users/9999")
    assert response.status_code == 404


def test_read_users(client: TestClient) -> None:
    response = client.get("/users")
    assert response.status_code == 200
    ids = [user_json["id"] for user_json in response.json()]
    assert user.id in ids
    assert other_user.id in ids


def test_update_user_name(client: TestClient) -> None:
    response = client.patch(
        f"/users/{other_user.id}",
        json={"name": "Robert"},
    )
    assert response.status_code == 200
    json = response.json()
    assert json["name"] == "Robert"
    assert json["email"] == "bob@shareit.test"


def test_update_user_with_own_email(client: TestClient) -> None:
    response = client.patch(
        f"/users/{other_user.id}",
        json={"email": "bob@shareit.test"},
    )
    assert response.status_code == 200


def test_update_user_with_used_email(client: TestClient) -> None:
    response = client.patch(
        f"/users/{other_user.id}",
        json={"email": "alice@shareit.test"},
    )
    assert response.status_code == 409


def test_update_user_without_changes(client: TestClient) -> None:
    response = client.patch(f"/users/{user.id}", json={})
    assert response.status_code == 200
    assert response.json() == {
        "id": user.id,
        "name": "Alice",
        "email": "alice@shareit.test",
    }


def test_update_user_with_null_name(client: TestClient) -> None:
    response = client.patch(f"/users/{user.id}", json={"name": None})
    assert response.status_code == 200
    assert response.json()["name"] == "Alice"


def test_update_missing_user(client: TestClient) -> None:
    response = client.patch("/users/9999", json={"name": "Nobody"})
    assert response.status_code == 404


def test_invalid_body_is_a_bad_request(client: TestClient) -> None:
    response = client.post("/users", json={"name": "No email"})
    assert response.status_code == 400


def test_delete_user(client: TestClient) -> None:
    response = client.delete(f"/users/{user_to_delete.id}")
    assert response.status_code == 204

    response = client.get(f"/users/{user_to_delete.id}")
    assert response.status_code == 404

    # The bookings of the deleted user's items are deleted with them
    response = client.get(
        "/bookings",
        headers={"X-Sharer-User-Id": str(borrower.id)},
    )
    assert response.status_code == 200
    assert response.json() == []

    # Comments written by the deleted user are removed from other users' items
    response = client.get(f"/items/{commented_item.id}", headers=sharer(user))
    assert response.status_code == 200
    assert response.json()["comments"] == []

    # Requests of the deleted user are removed, items answering them are kept
    response = client.get(
        f"/requests/{request_of_deleted_user.id}",
        headers=sharer(user),
    )
    assert response.status_code == 404

    response = client.get(f"/items/{answering_item.id}", headers=sharer(user))
    assert response.status_code == 200
    assert response.json()["requestId"] is None


def test_delete_missing_user(client: TestClient) -> None:
    response = client.delete("/users/9999")
    assert response.status_code == 404
