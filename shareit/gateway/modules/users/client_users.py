import httpx
from fastapi import Depends, Response

from shareit.gateway.client import BaseClient
from shareit.gateway.dependencies import get_http_client, get_request_id
from shareit.gateway.modules.users import schemas_users


class UsersClient(BaseClient):
    async def create_user(self, user: schemas_users.UserCreate) -> Response:
        return await self.post(
            "/users",
            body=user.model_dump(by_alias=True, mode="json"),
        )

    async def update_user(
        self,
        user_id: int,
        user_update: schemas_users.UserUpdate,
    ) -> Response:
        return await self.patch(
            f"/users/{user_id}",
            body=user_update.model_dump(by_alias=True, mode="json", exclude_unset=True),
        )

    async def get_user(self, user_id: int) -> Response:
        return await self.get(f"/users/{user_id}")

    async def get_users(self) -> Response:
        return await self.get("/users")

    async def delete_user(self, user_id: int) -> Response:
        return await self.delete(f"/users/{user_id}")


def get_users_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    request_id: str = Depends(get_request_id),
) -> UsersClient:
    return UsersClient(http_client=http_client, request_id=request_id)
