"""
Various FastAPI [dependencies](https://fastapi.tiangolo.com/tutorial/dependencies/) of the ShareIt server

They are used in endpoints function signatures. For example:
```python
async def get_users(db: AsyncSession = Depends(get_db)):
```
"""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated, cast

import starlette.datastructures
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.utils.config import ServerSettings, construct_prod_settings
from shareit.server.modules.users import cruds_users, models_users
from shareit.server.state import (
    LifespanState,
    RuntimeLifespanState,
    disconnect_engine,
    init_engine,
    init_SessionLocal,
)
from shareit.types.exceptions import InvalidAppStateTypeError
from shareit.types.headers import SHARER_USER_ID_HEADER
from shareit.types.module import Module

shareit_error_logger = logging.getLogger("shareit.error")


async def init_app_state(
    app: FastAPI,
    settings: ServerSettings,
    module_list: list[Module],
    shareit_error_logger: logging.Logger,
) -> LifespanState:
    """
    Initialize the state of the application. This dependency should be used at the start of the application lifespan.

    This method should be called as a dependency, and test may override it to provide their own state.
    ```python
    state = await app.dependency_overrides.get(
        init_app_state,
        init_app_state,
    )(
        app=app,
        settings=settings,
        module_list=module_list,
        shareit_error_logger=shareit_error_logger,
    )
    ```
    """
    engine = init_engine(settings=settings)

    SessionLocal = init_SessionLocal(engine)

    shareit_error_logger.info("Startup: Database engine initialized")

    return LifespanState(
        engine=engine,
        SessionLocal=SessionLocal,
        module_list=module_list,
    )


async def disconnect_state(
    state: LifespanState,
    shareit_error_logger: logging.Logger,
) -> None:
    """
    Disconnect items requiring it. This dependency should be used at the end of the application lifespan.
    """
    await disconnect_engine(state["engine"])

    shareit_error_logger.info("Application state disconnected successfully.")


def get_app_state(request: Request) -> RuntimeLifespanState:
    """
    Get the application state from the request. The state is injected by our middleware.
    """
    # `request.state` may be a TypedDict or a starlette State object
    # depending if it is accessed in an endpoint or the lifespan
    if isinstance(request.state, dict):
        return cast("RuntimeLifespanState", request.state)
    if isinstance(request.state, starlette.datastructures.State):
        return cast("RuntimeLifespanState", request.state.__dict__["_state"])
    raise InvalidAppStateTypeError


AppState = Annotated[RuntimeLifespanState, Depends(get_app_state)]


@lru_cache
def get_settings() -> ServerSettings:
    """
    Return a settings object, based on `.env` dotenv and `config.yaml`
    """
    # `lru_cache()` decorator is here to prevent the class to be instantiated multiple times.
    # See https://fastapi.tiangolo.com/advanced/settings/#lru_cache-technical-details
    return construct_prod_settings()


async def get_db(state: AppState) -> AsyncGenerator[AsyncSession, None]:
    """
    Return a database session that will be automatically committed and closed after usage.

    If an HTTPException is raised during the request, we consider that the error was expected and managed by the endpoint. We commit the session.
    If an other exception is raised, we rollback the session.

    Cruds and endpoints should never call `db.commit()` or `db.rollback()` directly.
    After adding an object to the session, calling `await db.flush()` will integrate the changes in the transaction without committing them.
    """
    async with state["SessionLocal"]() as db:
        try:
            yield db
        except HTTPException:
            await db.commit()
            raise
        except Exception:
            await db.rollback()
            raise
        else:
            await db.commit()
        finally:
            await db.close()


def get_module_list(state: AppState) -> list[Module]:
    return state["module_list"]


def get_sharer_user_id(
    sharer_user_id: int = Header(alias=SHARER_USER_ID_HEADER),
) -> int:
    """
    Return the id of the acting user, sent in the `X-Sharer-User-Id` header.
    The user is not required to exist, use `get_sharer_user` for that.
    """
    return sharer_user_id


async def get_sharer_user(
    sharer_user_id: int = Depends(get_sharer_user_id),
    db: AsyncSession = Depends(get_db),
) -> models_users.User:
    """
    Return the acting user, raise a 404 error if the `X-Sharer-User-Id` header does not match an existing user.
    """
    user = await cruds_users.get_user_by_id(db=db, user_id=sharer_user_id)
    if user is None:
        raise HTTPException(
            status_code=404,
            detail=f"User {sharer_user_id} not found",
        )
    return user
