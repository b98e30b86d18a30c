from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi import Response
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from shareit.gateway.modules.users.client_users import UsersClient, get_users_client


@pytest.fixture
def users_client(
    mocker: MockerFixture,
    gateway_client: TestClient,
) -> Generator[MagicMock, None, None]:
    mocked_client = mocker.MagicMock(spec=UsersClient)
    gateway_client.app.dependency_overrides[get_users_client] = lambda: mocked_client  # type: ignore[attr-defined]
    yield mocked_client
    del gateway_client.app.dependency_overrides[get_users_client]  # type: ignore[attr-defined]


def test_create_user_is_forwarded(
    gateway_client: TestClient,
    users_client: MagicMock,
) -> None:
    users_client.create_user.return_value = Response(
        content=b'{"id": 1, "name": "Alice", "email": "alice@example.com"}',
        status_code=201,
        media_type="application/json",
    )

    response = gateway_client.post(
        "/users",
        json={"name": "Alice", "email": "alice@example.com"},
    )
    assert response.status_code == 201
    assert response.json()["id"] == 1
    users_client.create_user.assert_awaited_once()
    forwarded_user = users_client.create_user.call_args.kwargs["user"]
    assert forwarded_user.email == "alice@example.com"


def test_server_status_is_returned_unchanged(
    gateway_client: TestClient,
    users_client: MagicMock,
) -> None:
    users_client.create_user.return_value = Response(
        content=b'{"detail": "Email alice@example.com is already used"}',
        status_code=409,
        media_type="application/json",
    )

    response = gateway_client.post(
        "/users",
        json={"name": "Alice", "email": "alice@example.com"},
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Email alice@example.com is already used"


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Alice", "email": "not an email"},
        {"name": "   ", "email": "alice@example.com"},
        {"email": "alice@example.com"},
        {"name": "Alice"},
    ],
)
def test_create_invalid_user_is_refused(
    body: dict,
    gateway_client: TestClient,
    users_client: MagicMock,
) -> None:
    response = gateway_client.post("/users", json=body)
    assert response.status_code == 400
    users_client.create_user.assert_not_called()


def test_update_user_forwards_given_fields(
    gateway_client: TestClient,
    users_client: MagicMock,
) -> None:
    users_client.update_user.return_value = Response(
        content=b'{"id": 1, "name": "Alicia", "email": "alice@example.com"}',
        status_code=200,
        media_type="application/json",
    )

    response = gateway_client.patch("/users/1", json={"name": "Alicia"})
    assert response.status_code == 200
    user_update = users_client.update_user.call_args.kwargs["user_update"]
    assert user_update.model_dump(by_alias=True, exclude_unset=True) == {
        "name": "Alicia",
    }


def test_update_user_with_invalid_email_is_refused(
    gateway_client: TestClient,
    users_client: MagicMock,
) -> None:
    response = gateway_client.patch("/users/1", json={"email": "invalid"})
    assert response.status_code == 400
    users_client.update_user.assert_not_called()


def test_delete_user_is_forwarded(
    gateway_client: TestClient,
    users_client: MagicMock,
) -> None:
    users_client.delete_user.return_value = Response(status_code=204)

    response = gateway_client.delete("/users/3")
    assert response.status_code == 204
    users_client.delete_user.assert_awaited_once_with(user_id=3)
