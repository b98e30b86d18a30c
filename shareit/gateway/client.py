import logging
from typing import Any

import httpx
from fastapi import HTTPException, Response

from shareit.types.headers import SHARER_USER_ID_HEADER

shareit_gateway_logger = logging.getLogger("shareit.gateway")


class BaseClient:
    """
    Forward requests to the ShareIt server.

    The status code and the body of the server response are returned unchanged.
    Subclasses define one method per server endpoint.
    """

    def __init__(self, http_client: httpx.AsyncClient, request_id: str = ""):
        self.http_client = http_client
        self.request_id = request_id

    async def get(
        self,
        path: str,
        user_id: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> Response:
        return await self.forward("GET", path, user_id=user_id, params=params)

    async def post(
        self,
        path: str,
        body: Any,
        user_id: int | None = None,
    ) -> Response:
        return await self.forward("POST", path, user_id=user_id, body=body)

    async def patch(
        self,
        path: str,
        body: Any = None,
        user_id: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> Response:
        return await self.forward(
            "PATCH",
            path,
            user_id=user_id,
            params=params,
            body=body,
        )

    async def delete(
        self,
        path: str,
        user_id: int | None = None,
    ) -> Response:
        return await self.forward("DELETE", path, user_id=user_id)

    async def forward(
        self,
        method: str,
        path: str,
        user_id: int | None = None,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Response:
        headers = {}
        if user_id is not None:
            headers[SHARER_USER_ID_HEADER] = str(user_id)

        shareit_gateway_logger.info(
            f"{method} {path} params={params} user={user_id} ({self.request_id})",
        )

        try:
            server_response = await self.http_client.request(
                method,
                path,
                headers=headers,
                params=params,
                json=body,
            )
        except httpx.RequestError:
            shareit_gateway_logger.exception(
                f"Could not reach the ShareIt server for {method} {path} ({self.request_id})",
            )
            raise HTTPException(
                status_code=504,
                detail="Could not reach the ShareIt server",
            )

        shareit_gateway_logger.info(
            f"{method} {path} answered {server_response.status_code} ({self.request_id})",
        )

        return Response(
            content=server_response.content,
            status_code=server_response.status_code,
            media_type=server_response.headers.get("content-type"),
        )
