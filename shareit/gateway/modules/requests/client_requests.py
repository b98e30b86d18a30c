import httpx
from fastapi import Depends, Response

from shareit.gateway.client import BaseClient
from shareit.gateway.dependencies import get_http_client, get_request_id
from shareit.gateway.modules.requests import schemas_requests


class RequestsClient(BaseClient):
    async def create_request(
        self,
        user_id: int,
        request: schemas_requests.ItemRequestCreate,
    ) -> Response:
        return await self.post(
            "/requests",
            body=request.model_dump(by_alias=True, mode="json"),
            user_id=user_id,
        )

    async def get_own_requests(self, user_id: int) -> Response:
        return await self.get("/requests", user_id=user_id)

    async def get_other_users_requests(
        self,
        user_id: int,
        offset: int,
        size: int,
    ) -> Response:
        return await self.get(
            "/requests/all",
            user_id=user_id,
            params={"from": offset, "size": size},
        )

    async def get_request(self, user_id: int, request_id: int) -> Response:
        return await self.get(f"/requests/{request_id}", user_id=user_id)


def get_requests_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    request_id: str = Depends(get_request_id),
) -> RequestsClient:
    return RequestsClient(http_client=http_client, request_id=request_id)
