"""
Various FastAPI [dependencies](https://fastapi.tiangolo.com/tutorial/dependencies/) of the ShareIt gateway
"""

import logging
from functools import lru_cache
from typing import Annotated, cast

import httpx
import starlette.datastructures
from fastapi import Depends, FastAPI, Header, Request

from shareit.core.utils.config import GatewaySettings, construct_prod_gateway_settings
from shareit.gateway.state import (
    GatewayLifespanState,
    RuntimeGatewayLifespanState,
    disconnect_http_client,
    init_http_client,
)
from shareit.types.exceptions import InvalidAppStateTypeError
from shareit.types.headers import SHARER_USER_ID_HEADER


async def init_gateway_state(
    app: FastAPI,
    settings: GatewaySettings,
    shareit_error_logger: logging.Logger,
) -> GatewayLifespanState:
    """
    Initialize the state of the gateway. This dependency should be used at the start of the application lifespan.

    Tests may override it to provide their own state.
    """
    http_client = init_http_client(settings=settings)

    shareit_error_logger.info(
        f"Startup: Requests will be forwarded to {settings.SHAREIT_SERVER_URL}",
    )

    return GatewayLifespanState(http_client=http_client)


async def disconnect_gateway_state(
    state: GatewayLifespanState,
    shareit_error_logger: logging.Logger,
) -> None:
    await disconnect_http_client(state["http_client"])

    shareit_error_logger.info("Gateway state disconnected successfully.")


def get_app_state(request: Request) -> RuntimeGatewayLifespanState:
    """
    Get the gateway state from the request. The state is injected by our middleware.
    """
    if isinstance(request.state, dict):
        return cast("RuntimeGatewayLifespanState", request.state)
    if isinstance(request.state, starlette.datastructures.State):
        return cast("RuntimeGatewayLifespanState", request.state.__dict__["_state"])
    raise InvalidAppStateTypeError


AppState = Annotated[RuntimeGatewayLifespanState, Depends(get_app_state)]


@lru_cache
def get_settings() -> GatewaySettings:
    """
    Return a settings object, based on `.env.gateway` dotenv and `config.gateway.yaml`
    """
    return construct_prod_gateway_settings()


def get_http_client(state: AppState) -> httpx.AsyncClient:
    return state["http_client"]


def get_request_id(state: AppState) -> str:
    return state["request_id"]


def get_sharer_user_id(
    sharer_user_id: int = Header(alias=SHARER_USER_ID_HEADER),
) -> int:
    """
    Return the id of the acting user. A missing or non integer header is refused before anything is forwarded.
    """
    return sharer_user_id
