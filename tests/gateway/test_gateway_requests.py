from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi import Response
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from shareit.gateway.modules.requests.client_requests import (
    RequestsClient,
    get_requests_client,
)

SHARER = {"X-Sharer-User-Id": "5"}


@pytest.fixture
def requests_client(
    mocker: MockerFixture,
    gateway_client: TestClient,
) -> Generator[MagicMock, None, None]:
    mocked_client = mocker.MagicMock(spec=RequestsClient)
    mocked_client.get_other_users_requests.return_value = Response(
        content=b"[]",
        status_code=200,
        media_type="application/json",
    )
    gateway_client.app.dependency_overrides[get_requests_client] = (  # type: ignore[attr-defined]
        lambda: mocked_client
    )
    yield mocked_client
    del gateway_client.app.dependency_overrides[get_requests_client]  # type: ignore[attr-defined]


def test_blank_request_is_refused(
    gateway_client: TestClient,
    requests_client: MagicMock,
) -> None:
    response = gateway_client.post(
        "/requests",
        json={"description": ""},
        headers=SHARER,
    )
    assert response.status_code == 400
    requests_client.create_request.assert_not_called()


def test_request_is_forwarded(
    gateway_client: TestClient,
    requests_client: MagicMock,
) -> None:
    requests_client.create_request.return_value = Response(
        content=b'{"id": 1, "description": "A tent"}',
        status_code=201,
        media_type="application/json",
    )

    response = gateway_client.post(
        "/requests",
        json={"description": "A tent"},
        headers=SHARER,
    )
    assert response.status_code == 201
    assert requests_client.create_request.call_args.kwargs["user_id"] == 5


def test_pagination_is_forwarded(
    gateway_client: TestClient,
    requests_client: MagicMock,
) -> None:
    response = gateway_client.get(
        "/requests/all",
        params={"from": 20, "size": 5},
        headers=SHARER,
    )
    assert response.status_code == 200
    requests_client.get_other_users_requests.assert_awaited_once_with(
        user_id=5,
        offset=20,
        size=5,
    )


@pytest.mark.parametrize(
    "params",
    [{"from": -1, "size": 10}, {"from": 0, "size": 0}, {"from": 0, "size": -3}],
)
def test_invalid_pagination_is_refused(
    params: dict,
    gateway_client: TestClient,
    requests_client: MagicMock,
) -> None:
    response = gateway_client.get("/requests/all", params=params, headers=SHARER)
    assert response.status_code == 400
    requests_client.get_other_users_requests.assert_not_called()
