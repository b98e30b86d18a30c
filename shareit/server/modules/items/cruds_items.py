"""File defining the functions called by the endpoints, making queries to the table using the models"""

from collections.abc import Sequence

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.bookings import models_bookings
from shareit.server.modules.items import models_items, schemas_items


async def get_item_by_id(
    db: AsyncSession,
    item_id: int,
) -> models_items.Item | None:
    result = await db.execute(
        select(models_items.Item)
        .where(models_items.Item.id == item_id)
        .execution_options(populate_existing=True),
    )
    return result.scalars().first()


async def get_items_by_owner_id(
    db: AsyncSession,
    owner_id: int,
) -> Sequence[models_items.Item]:
    result = await db.execute(
        select(models_items.Item)
        .where(models_items.Item.owner_id == owner_id)
        .order_by(models_items.Item.id),
    )
    return result.scalars().all()


async def search_available_items(
    db: AsyncSession,
    text: str,
) -> Sequence[models_items.Item]:
    """Return available items whose name or description contains `text`, ignoring case"""

    pattern = f"%{text}%"
    result = await db.execute(
        select(models_items.Item)
        .where(
            models_items.Item.available,
            or_(
                models_items.Item.name.ilike(pattern),
                models_items.Item.description.ilike(pattern),
            ),
        )
        .order_by(models_items.Item.id),
    )
    return result.scalars().all()


async def create_item(
    db: AsyncSession,
    item: models_items.Item,
) -> None:
    db.add(item)
    await db.flush()


async def update_item(
    db: AsyncSession,
    item_id: int,
    item_update: schemas_items.ItemUpdate,
) -> None:
    values = item_update.model_dump(exclude_none=True)
    if not values:
        return
    await db.execute(
        update(models_items.Item)
        .where(models_items.Item.id == item_id)
        .values(**values),
    )
    await db.flush()


async def delete_item(
    db: AsyncSession,
    item_id: int,
) -> None:
    """Delete an item with its comments and bookings"""

    await db.execute(
        delete(models_items.Comment).where(models_items.Comment.item_id == item_id),
    )
    await db.execute(
        delete(models_bookings.Booking).where(
            models_bookings.Booking.item_id == item_id,
        ),
    )
    await db.execute(delete(models_items.Item).where(models_items.Item.id == item_id))
    await db.flush()


async def get_comments_by_item_id(
    db: AsyncSession,
    item_id: int,
) -> Sequence[models_items.Comment]:
    result = await db.execute(
        select(models_items.Comment)
        .where(models_items.Comment.item_id == item_id)
        .order_by(models_items.Comment.created, models_items.Comment.id),
    )
    return result.scalars().all()


async def create_comment(
    db: AsyncSession,
    comment: models_items.Comment,
) -> None:
    db.add(comment)
    await db.flush()


async def get_comment_by_id(
    db: AsyncSession,
    comment_id: int,
) -> models_items.Comment | None:
    result = await db.execute(
        select(models_items.Comment)
        .where(models_items.Comment.id == comment_id)
        .execution_options(populate_existing=True),
    )
    return result.scalars().first()


async def delete_items_by_owner_id(
    db: AsyncSession,
    owner_id: int,
) -> None:
    """
    Delete the items of a user, with their bookings and comments, and the comments written by the user.
    """
    owned_item_ids = select(models_items.Item.id).where(
        models_items.Item.owner_id == owner_id,
    )
    await db.execute(
        delete(models_bookings.Booking).where(
            models_bookings.Booking.item_id.in_(owned_item_ids),
        ),
    )
    await db.execute(
        delete(models_items.Comment).where(
            or_(
                models_items.Comment.author_id == owner_id,
                models_items.Comment.item_id.in_(owned_item_ids),
            ),
        ),
    )
    await db.execute(
        delete(models_items.Item).where(models_items.Item.owner_id == owner_id),
    )
    await db.flush()
