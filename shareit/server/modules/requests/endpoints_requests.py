from collections.abc import Sequence
from datetime import UTC, datetime

from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.dependencies import get_db, get_sharer_user
from shareit.server.modules.requests import (
    cruds_requests,
    models_requests,
    schemas_requests,
)
from shareit.server.modules.requests.user_deleter_requests import (
    RequestsUserDeleter,
)
from shareit.server.modules.users import models_users
from shareit.types.module import Module
from shareit.utils.tools import paginate

module = Module(
    root="requests",
    tag="Requests",
    user_deleter=RequestsUserDeleter(),
)


@module.router.post(
    "/requests",
    response_model=schemas_requests.ItemRequest,
    status_code=201,
)
async def create_request(
    request: schemas_requests.ItemRequestBase,
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
):
    """
    Request an item which is not listed yet. Owners may answer by creating an item referencing the request.
    """
    db_request = models_requests.ItemRequest(
        description=request.description,
        requestor_id=user.id,
        created=datetime.now(UTC),
    )
    await cruds_requests.create_request(db=db, request=db_request)

    return db_request


@module.router.get(
    "/requests",
    response_model=list[schemas_requests.ItemRequestWithItems],
    status_code=200,
)
async def read_own_requests(
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
) -> Sequence[models_requests.ItemRequest]:
    """
    Return the requests of the user, newest first, with the items answering them
    """
    return await cruds_requests.get_requests_by_requestor_id(
        db=db,
        requestor_id=user.id,
    )


@module.router.get(
    "/requests/all",
    response_model=list[schemas_requests.ItemRequestWithItems],
    status_code=200,
)
async def read_other_users_requests(
    offset: int = Query(default=0, alias="from", ge=0),
    size: int = Query(default=10, gt=0),
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
) -> list[models_requests.ItemRequest]:
    """
    Return the requests made by other users, newest first.

    `from` is the index of the first request to return and `size` the maximum number of requests.
    """
    requests = await cruds_requests.get_requests_of_other_users(
        db=db,
        user_id=user.id,
    )
    return paginate(requests, offset=offset, size=size)


@module.router.get(
    "/requests/{request_id}",
    response_model=schemas_requests.ItemRequestWithItems,
    status_code=200,
)
async def read_request(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
):
    request = await cruds_requests.get_request_by_id(db=db, request_id=request_id)
    if request is None:
        raise HTTPException(
            status_code=404,
            detail=f"Request {request_id} not found",
        )

    return request
