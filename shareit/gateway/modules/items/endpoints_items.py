from fastapi import Depends, Query

from shareit.gateway.dependencies import get_sharer_user_id
from shareit.gateway.modules.items import schemas_items
from shareit.gateway.modules.items.client_items import ItemsClient, get_items_client
from shareit.types.module import Module

module = Module(
    root="items",
    tag="Items",
)


@module.router.post("/items")
async def create_item(
    item: schemas_items.ItemCreate,
    user_id: int = Depends(get_sharer_user_id),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.create_item(user_id=user_id, item=item)


@module.router.patch("/items/{item_id}")
async def update_item(
    item_id: int,
    item_update: schemas_items.ItemUpdate,
    user_id: int = Depends(get_sharer_user_id),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.update_item(
        user_id=user_id,
        item_id=item_id,
        item_update=item_update,
    )


@module.router.get("/items")
async def read_own_items(
    user_id: int = Depends(get_sharer_user_id),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.get_items(user_id=user_id)


@module.router.get("/items/search")
async def search_items(
    text: str = Query(default=""),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.search_items(text=text)


@module.router.get("/items/{item_id}")
async def read_item(
    item_id: int,
    user_id: int = Depends(get_sharer_user_id),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.get_item(user_id=user_id, item_id=item_id)


@module.router.delete("/items/{item_id}")
async def delete_item(
    item_id: int,
    user_id: int = Depends(get_sharer_user_id),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.delete_item(user_id=user_id, item_id=item_id)


@module.router.post("/items/{item_id}/comment")
async def create_comment(
    item_id: int,
    comment: schemas_items.CommentCreate,
    user_id: int = Depends(get_sharer_user_id),
    client: ItemsClient = Depends(get_items_client),
):
    return await client.create_comment(
        user_id=user_id,
        item_id=item_id,
        comment=comment,
    )
