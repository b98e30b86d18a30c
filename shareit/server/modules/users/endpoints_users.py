import logging
from collections.abc import Sequence

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.dependencies import get_db, get_module_list
from shareit.server.modules.users import cruds_users, models_users, schemas_users
from shareit.types.module import Module

module = Module(
    root="users",
    tag="Users",
)


shareit_error_logger = logging.getLogger("shareit.error")


@module.router.get(
    "/users",
    response_model=list[schemas_users.User],
    status_code=200,
)
async def read_users(
    db: AsyncSession = Depends(get_db),
) -> Sequence[models_users.User]:
    """
    Return all users
    """
    return await cruds_users.get_users(db=db)


@module.router.get(
    "/users/{user_id}",
    response_model=schemas_users.User,
    status_code=200,
)
async def read_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    user = await cruds_users.get_user_by_id(db=db, user_id=user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")

    return user


@module.router.post(
    "/users",
    response_model=schemas_users.User,
    status_code=201,
)
async def create_user(
    user: schemas_users.UserBase,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a user. The email address must not be used by another user.
    """
    if await cruds_users.get_user_by_email(db=db, email=user.email) is not None:
        raise HTTPException(
            status_code=409,
            detail=f"Email {user.email} is already used",
        )

    db_user = models_users.User(
        name=user.name,
        email=user.email,
    )
    return await cruds_users.create_user(db=db, user=db_user)


@module.router.patch(
    "/users/{user_id}",
    response_model=schemas_users.User,
    status_code=200,
)
async def update_user(
    user_id: int,
    user_update: schemas_users.UserUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update the name and/or the email of a user. Omitted fields are kept unchanged.
    """
    user = await cruds_users.get_user_by_id(db=db, user_id=user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")

    if user_update.email is not None and user_update.email != user.email:
        existing_user = await cruds_users.get_user_by_email(
            db=db,
            email=user_update.email,
        )
        if existing_user is not None:
            raise HTTPException(
                status_code=409,
                detail=f"Email {user_update.email} is already used",
            )

    await cruds_users.update_user(db=db, user_id=user_id, user_update=user_update)

    return await cruds_users.get_user_by_id(db=db, user_id=user_id)


@module.router.delete(
    "/users/{user_id}",
    status_code=204,
)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    module_list: list[Module] = Depends(get_module_list),
):
    """
    Delete a user. Items, bookings, comments and requests of the user are deleted too.
    """
    user = await cruds_users.get_user_by_id(db=db, user_id=user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")

    for user_module in module_list:
        if user_module.user_deleter is not None:
            await user_module.user_deleter.delete_user(user_id=user_id, db=db)

    await cruds_users.delete_user(db=db, user_id=user_id)

    shareit_error_logger.info(f"User {user_id} deleted")
