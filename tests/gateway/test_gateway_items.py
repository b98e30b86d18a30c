from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi import Response
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from shareit.gateway.modules.items.client_items import ItemsClient, get_items_client

SHARER = {"X-Sharer-User-Id": "1"}


@pytest.fixture
def items_client(
    mocker: MockerFixture,
    gateway_client: TestClient,
) -> Generator[MagicMock, None, None]:
    mocked_client = mocker.MagicMock(spec=ItemsClient)
    gateway_client.app.dependency_overrides[get_items_client] = lambda: mocked_client  # type: ignore[attr-defined]
    yield mocked_client
    del gateway_client.app.dependency_overrides[get_items_client]  # type: ignore[attr-defined]


def test_create_item_is_forwarded(
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    items_client.create_item.return_value = Response(
        content=b'{"id": 4}',
        status_code=201,
        media_type="application/json",
    )

    response = gateway_client.post(
        "/items",
        json={"name": "Drill", "description": "Powerful", "available": True},
        headers=SHARER,
    )
    assert response.status_code == 201
    assert items_client.create_item.call_args.kwargs["user_id"] == 1


@pytest.mark.parametrize(
    "body",
    [
        {"name": "", "description": "Powerful", "available": True},
        {"name": "Drill", "description": " ", "available": True},
        {"name": "Drill", "description": "Powerful"},
    ],
)
def test_create_invalid_item_is_refused(
    body: dict,
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    response = gateway_client.post("/items", json=body, headers=SHARER)
    assert response.status_code == 400
    items_client.create_item.assert_not_called()


@pytest.mark.parametrize(
    "headers",
    [{}, {"X-Sharer-User-Id": "not-a-number"}],
)
def test_missing_or_invalid_sharer_header_is_refused(
    headers: dict,
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    response = gateway_client.post(
        "/items",
        json={"name": "Drill", "description": "Powerful", "available": True},
        headers=headers,
    )
    assert response.status_code == 400
    items_client.create_item.assert_not_called()


def test_update_item_with_blank_name_is_refused(
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    response = gateway_client.patch("/items/1", json={"name": " "}, headers=SHARER)
    assert response.status_code == 400
    items_client.update_item.assert_not_called()


def test_search_does_not_require_header(
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    items_client.search_items.return_value = Response(
        content=b"[]",
        status_code=200,
        media_type="application/json",
    )

    response = gateway_client.get("/items/search", params={"text": "drill"})
    assert response.status_code == 200
    assert response.json() == []
    items_client.search_items.assert_awaited_once_with(text="drill")


def test_blank_comment_is_refused(
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    response = gateway_client.post(
        "/items/1/comment",
        json={"text": "   "},
        headers=SHARER,
    )
    assert response.status_code == 400
    items_client.create_comment.assert_not_called()


def test_comment_is_forwarded(
    gateway_client: TestClient,
    items_client: MagicMock,
) -> None:
    items_client.create_comment.return_value = Response(
        content=b'{"id": 1, "text": "Great", "authorName": "Bob"}',
        status_code=201,
        media_type="application/json",
    )

    response = gateway_client.post(
        "/items/7/comment",
        json={"text": "Great"},
        headers=SHARER,
    )
    assert response.status_code == 201
    assert items_client.create_comment.call_args.kwargs["item_id"] == 7
