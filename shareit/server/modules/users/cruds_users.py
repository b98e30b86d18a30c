"""File defining the functions called by the endpoints, making queries to the table using the models"""

from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.users import models_users, schemas_users


async def get_users(db: AsyncSession) -> Sequence[models_users.User]:
    """Return all users from database"""

    result = await db.execute(select(models_users.User).order_by(models_users.User.id))
    return result.scalars().all()


async def get_user_by_id(
    db: AsyncSession,
    user_id: int,
) -> models_users.User | None:
    """Return user with id from database"""

    result = await db.execute(
        select(models_users.User)
        .where(models_users.User.id == user_id)
        .execution_options(populate_existing=True),
    )
    return result.scalars().first()


async def get_user_by_email(
    db: AsyncSession,
    email: str,
) -> models_users.User | None:
    """Return user with email from database"""

    result = await db.execute(
        select(models_users.User).where(models_users.User.email == email),
    )
    return result.scalars().first()


async def create_user(
    db: AsyncSession,
    user: models_users.User,
) -> models_users.User:
    """Create a new user in database and return it"""

    db.add(user)
    await db.flush()
    return user


async def update_user(
    db: AsyncSession,
    user_id: int,
    user_update: schemas_users.UserUpdate,
) -> None:
    values = user_update.model_dump(exclude_none=True)
    if not values:
        return
    await db.execute(
        update(models_users.User)
        .where(models_users.User.id == user_id)
        .values(**values),
    )
    await db.flush()


async def delete_user(
    db: AsyncSession,
    user_id: int,
) -> None:
    await db.execute(delete(models_users.User).where(models_users.User.id == user_id))
    await db.flush()
