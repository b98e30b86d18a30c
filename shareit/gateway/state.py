from typing import TypedDict

import httpx

from shareit.core.utils.config import GatewaySettings


class GatewayLifespanState(TypedDict):
    """
    The GatewayLifespanState is yielded by the lifespan of the gateway and contained in each request state.
    Use dependencies to access it
    """

    # Client used to forward the requests to the server
    http_client: httpx.AsyncClient


class RuntimeGatewayLifespanState(GatewayLifespanState):
    request_id: str


def init_http_client(settings: GatewaySettings) -> httpx.AsyncClient:
    """
    Return an HTTP client sending requests to the ShareIt server
    """
    return httpx.AsyncClient(
        base_url=settings.SHAREIT_SERVER_URL,
        timeout=settings.SHAREIT_SERVER_TIMEOUT,
    )


async def disconnect_http_client(http_client: httpx.AsyncClient) -> None:
    await http_client.aclose()
