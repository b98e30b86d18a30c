from fastapi import Depends

from shareit.gateway.modules.users import schemas_users
from shareit.gateway.modules.users.client_users import UsersClient, get_users_client
from shareit.types.module import Module

module = Module(
    root="users",
    tag="Users",
)


@module.router.post("/users")
async def create_user(
    user: schemas_users.UserCreate,
    client: UsersClient = Depends(get_users_client),
):
    return await client.create_user(user=user)


@module.router.patch("/users/{user_id}")
async def update_user(
    user_id: int,
    user_update: schemas_users.UserUpdate,
    client: UsersClient = Depends(get_users_client),
):
    return await client.update_user(user_id=user_id, user_update=user_update)


@module.router.get("/users/{user_id}")
async def read_user(
    user_id: int,
    client: UsersClient = Depends(get_users_client),
):
    return await client.get_user(user_id=user_id)


@module.router.get("/users")
async def read_users(
    client: UsersClient = Depends(get_users_client),
):
    return await client.get_users()


@module.router.delete("/users/{user_id}")
async def delete_user(
    user_id: int,
    client: UsersClient = Depends(get_users_client),
):
    return await client.delete_user(user_id=user_id)
