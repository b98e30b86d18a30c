from datetime import UTC, datetime

from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.dependencies import get_db, get_sharer_user, get_sharer_user_id
from shareit.server.modules.bookings import cruds_bookings, schemas_bookings
from shareit.server.modules.items import cruds_items, models_items, schemas_items
from shareit.server.modules.items.user_deleter_items import ItemsUserDeleter
from shareit.server.modules.requests import cruds_requests
from shareit.server.modules.users import models_users
from shareit.types.module import Module

module = Module(
    root="items",
    tag="Items",
    user_deleter=ItemsUserDeleter(),
)


def comment_to_schema(comment: models_items.Comment) -> schemas_items.Comment:
    return schemas_items.Comment(
        id=comment.id,
        text=comment.text,
        author_name=comment.author.name,
        created=comment.created,
    )


async def item_with_bookings(
    db: AsyncSession,
    item: models_items.Item,
    user_id: int,
    now: datetime,
) -> schemas_items.ItemWithBookings:
    """
    Add comments to an item. The last and next approved bookings are only added for the owner.
    """
    comments = await cruds_items.get_comments_by_item_id(db=db, item_id=item.id)
    result = schemas_items.ItemWithBookings.model_validate(
        {
            **schemas_items.Item.model_validate(item).model_dump(),
            "comments": [comment_to_schema(comment) for comment in comments],
        },
    )
    if item.owner_id == user_id:
        last_booking = await cruds_bookings.get_last_booking(
            db=db,
            item_id=item.id,
            now=now,
        )
        next_booking = await cruds_bookings.get_next_booking(
            db=db,
            item_id=item.id,
            now=now,
        )
        result.last_booking = (
            schemas_bookings.Booking.model_validate(last_booking)
            if last_booking is not None
            else None
        )
        result.next_booking = (
            schemas_bookings.Booking.model_validate(next_booking)
            if next_booking is not None
            else None
        )
    return result


@module.router.post(
    "/items",
    response_model=schemas_items.Item,
    status_code=201,
)
async def create_item(
    item: schemas_items.ItemBase,
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
):
    """
    List a new item owned by the user. `requestId` may reference the request the item answers.
    """
    if item.request_id is not None:
        request = await cruds_requests.get_request_by_id(
            db=db,
            request_id=item.request_id,
        )
        if request is None:
            raise HTTPException(
                status_code=404,
                detail=f"Request {item.request_id} not found",
            )

    db_item = models_items.Item(
        name=item.name,
        description=item.description,
        available=item.available,
        owner_id=user.id,
        request_id=item.request_id,
    )
    await cruds_items.create_item(db=db, item=db_item)

    return db_item


@module.router.patch(
    "/items/{item_id}",
    response_model=schemas_items.Item,
    status_code=200,
)
async def update_item(
    item_id: int,
    item_update: schemas_items.ItemUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_sharer_user_id),
):
    """
    Update the name, the description or the availability of an item.

    **Only the owner of the item can use this endpoint**
    """
    item = await cruds_items.get_item_by_id(db=db, item_id=item_id)
    # Other users' items are hidden
    if item is None or item.owner_id != user_id:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    await cruds_items.update_item(db=db, item_id=item_id, item_update=item_update)

    return await cruds_items.get_item_by_id(db=db, item_id=item_id)


@module.router.get(
    "/items",
    response_model=list[schemas_items.ItemWithBookings],
    status_code=200,
)
async def read_own_items(
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
):
    """
    Return the items of the user with their comments and their last and next approved bookings
    """
    now = datetime.now(UTC)
    items = await cruds_items.get_items_by_owner_id(db=db, owner_id=user.id)
    return [
        await item_with_bookings(db=db, item=item, user_id=user.id, now=now)
        for item in items
    ]


@module.router.get(
    "/items/search",
    response_model=list[schemas_items.Item],
    status_code=200,
)
async def search_items(
    text: str = Query(default=""),
    db: AsyncSession = Depends(get_db),
):
    """
    Search available items whose name or description contains `text`, ignoring case.
    A blank text gives no result.
    """
    if not text.strip():
        return []

    return await cruds_items.search_available_items(db=db, text=text)


@module.router.get(
    "/items/{item_id}",
    response_model=schemas_items.ItemWithBookings,
    status_code=200,
)
async def read_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_sharer_user_id),
):
    """
    Return an item with its comments. The last and next approved bookings are only given to the owner.
    """
    item = await cruds_items.get_item_by_id(db=db, item_id=item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    return await item_with_bookings(
        db=db,
        item=item,
        user_id=user_id,
        now=datetime.now(UTC),
    )


@module.router.delete(
    "/items/{item_id}",
    status_code=204,
)
async def delete_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_sharer_user_id),
):
    """
    Delete an item with its bookings and comments.

    **Only the owner of the item can use this endpoint**
    """
    item = await cruds_items.get_item_by_id(db=db, item_id=item_id)
    if item is None or item.owner_id != user_id:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    await cruds_items.delete_item(db=db, item_id=item_id)


@module.router.post(
    "/items/{item_id}/comment",
    response_model=schemas_items.Comment,
    status_code=201,
)
async def create_comment(
    item_id: int,
    comment: schemas_items.CommentBase,
    db: AsyncSession = Depends(get_db),
    user: models_users.User = Depends(get_sharer_user),
):
    """
    Comment an item. The user must have rented the item and the rental must be over.
    """
    item = await cruds_items.get_item_by_id(db=db, item_id=item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    now = datetime.now(UTC)
    if not await cruds_bookings.has_completed_booking(
        db=db,
        item_id=item_id,
        booker_id=user.id,
        now=now,
    ):
        raise HTTPException(
            status_code=400,
            detail=f"User {user.id} has no finished booking of item {item_id}",
        )

    db_comment = models_items.Comment(
        text=comment.text,
        item_id=item_id,
        author_id=user.id,
        created=now,
    )
    await cruds_items.create_comment(db=db, comment=db_comment)

    created_comment = await cruds_items.get_comment_by_id(
        db=db,
        comment_id=db_comment.id,
    )
    if created_comment is None:
        raise HTTPException(status_code=500, detail="Comment could not be created")

    return comment_to_schema(created_comment)
