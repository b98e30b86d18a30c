import httpx
from fastapi import Depends, Response

from shareit.gateway.client import BaseClient
from shareit.gateway.dependencies import get_http_client, get_request_id
from shareit.gateway.modules.items import schemas_items


class ItemsClient(BaseClient):
    async def create_item(
        self,
        user_id: int,
        item: schemas_items.ItemCreate,
    ) -> Response:
        return await self.post(
            "/items",
            body=item.model_dump(by_alias=True, mode="json"),
            user_id=user_id,
        )

    async def update_item(
        self,
        user_id: int,
        item_id: int,
        item_update: schemas_items.ItemUpdate,
    ) -> Response:
        return await self.patch(
            f"/items/{item_id}",
            body=item_update.model_dump(by_alias=True, mode="json", exclude_unset=True),
            user_id=user_id,
        )

    async def get_item(self, user_id: int, item_id: int) -> Response:
        return await self.get(f"/items/{item_id}", user_id=user_id)

    async def get_items(self, user_id: int) -> Response:
        return await self.get("/items", user_id=user_id)

    async def search_items(self, text: str) -> Response:
        return await self.get("/items/search", params={"text": text})

    async def delete_item(self, user_id: int, item_id: int) -> Response:
        return await self.delete(f"/items/{item_id}", user_id=user_id)

    async def create_comment(
        self,
        user_id: int,
        item_id: int,
        comment: schemas_items.CommentCreate,
    ) -> Response:
        return await self.post(
            f"/items/{item_id}/comment",
            body=comment.model_dump(by_alias=True, mode="json"),
            user_id=user_id,
        )


def get_items_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    request_id: str = Depends(get_request_id),
) -> ItemsClient:
    return ItemsClient(http_client=http_client, request_id=request_id)
