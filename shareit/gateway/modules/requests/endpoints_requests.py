from fastapi import Depends, Query

from shareit.gateway.dependencies import get_sharer_user_id
from shareit.gateway.modules.requests import schemas_requests
from shareit.gateway.modules.requests.client_requests import (
    RequestsClient,
    get_requests_client,
)
from shareit.types.module import Module

module = Module(
    root="requests",
    tag="Requests",
)


@module.router.post("/requests")
async def create_request(
    request: schemas_requests.ItemRequestCreate,
    user_id: int = Depends(get_sharer_user_id),
    client: RequestsClient = Depends(get_requests_client),
):
    return await client.create_request(user_id=user_id, request=request)


@module.router.get("/requests")
async def read_own_requests(
    user_id: int = Depends(get_sharer_user_id),
    client: RequestsClient = Depends(get_requests_client),
):
    return await client.get_own_requests(user_id=user_id)


@module.router.get("/requests/all")
async def read_other_users_requests(
    offset: int = Query(default=0, alias="from", ge=0),
    size: int = Query(default=10, gt=0),
    user_id: int = Depends(get_sharer_user_id),
    client: RequestsClient = Depends(get_requests_client),
):
    return await client.get_other_users_requests(
        user_id=user_id,
        offset=offset,
        size=size,
    )


@module.router.get("/requests/{request_id}")
async def read_request(
    request_id: int,
    user_id: int = Depends(get_sharer_user_id),
    client: RequestsClient = Depends(get_requests_client),
):
    return await client.get_request(user_id=user_id, request_id=request_id)
