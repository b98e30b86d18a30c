from typing import TypedDict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shareit.core.utils.config import ServerSettings
from shareit.types.module import Module
from shareit.types.sqlalchemy import SessionLocalType


class LifespanState(TypedDict):
    """
    The LifespanState is yielded by the lifespan of the server and contained in each request state.
    Use dependencies to access it
    """

    # Database engine
    engine: AsyncEngine
    # Database session creator
    SessionLocal: SessionLocalType
    # Modules enabled on the server
    module_list: list[Module]


class RuntimeLifespanState(LifespanState):
    """
    Requests contains an extended version of the LifespanState for each request.
    """

    request_id: str


def init_engine(settings: ServerSettings) -> AsyncEngine:
    """
    Return the (asynchronous) database engine based on the settings
    """

    return create_async_engine(
        settings.SQLALCHEMY_DATABASE_URL,
        echo=settings.DATABASE_DEBUG,
    )


def init_SessionLocal(engine: AsyncEngine) -> SessionLocalType:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def disconnect_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
