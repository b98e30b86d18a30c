"""File defining the Metadata. And the basic functions creating the database tables and calling the router"""

import logging
import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from shareit.core.utils.config import ServerSettings
from shareit.core.utils.log import LogConfig
from shareit.server import api
from shareit.server.dependencies import disconnect_state, init_app_state
from shareit.server.module import module_list
from shareit.server.state import LifespanState
from shareit.types.sqlalchemy import Base
from shareit.utils.tools import use_route_path_as_operation_ids

# NOTE: We can not get loggers at the top of this file like we do in other files
# as the loggers are not yet initialized


async def init_db(
    engine: AsyncEngine,
    shareit_error_logger: logging.Logger,
    drop_db: bool = False,
) -> None:
    """
    Create the missing tables of every model.

    if drop_db is True, we will drop all tables before creating them again
    """
    try:
        async with engine.begin() as conn:
            if drop_db:
                shareit_error_logger.info("Startup: Dropping database tables")
                await conn.run_sync(Base.metadata.drop_all)

            # `create_all` only creates tables which do not exist yet
            await conn.run_sync(Base.metadata.create_all)

        shareit_error_logger.info("Startup: Database tables updated")
    except Exception as error:
        shareit_error_logger.fatal(
            f"Startup: Could not create tables in the database: {error}",
        )
        raise


# We wrap the application in a function to be able to pass the settings and drop_db parameters
# The drop_db parameter is used to drop the database tables before creating them again
def get_application(settings: ServerSettings, drop_db: bool = False) -> FastAPI:
    # Initialize loggers
    LogConfig().initialize_loggers(settings=settings)

    shareit_access_logger = logging.getLogger("shareit.access")
    shareit_error_logger = logging.getLogger("shareit.error")

    # Creating a lifespan which will be called when the application starts then shuts down
    # https://fastapi.tiangolo.com/advanced/events/
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[LifespanState, None]:
        shareit_error_logger.info("Startup: Initializing server")

        state: LifespanState = await app.dependency_overrides.get(
            init_app_state,
            init_app_state,
        )(
            app=app,
            settings=settings,
            module_list=module_list,
            shareit_error_logger=shareit_error_logger,
        )

        # When started by gunicorn, the database is initialized once by the arbiter
        # See gunicorn.conf.py
        if os.getenv("SHAREIT_INIT_DB", "True") != "False":
            await init_db(
                engine=state["engine"],
                shareit_error_logger=shareit_error_logger,
                drop_db=drop_db,
            )

        yield state

        shareit_error_logger.info("Shutting down")
        await disconnect_state(
            state=state,
            shareit_error_logger=shareit_error_logger,
        )

    # Initialize app
    app = FastAPI(
        title="ShareIt server",
        version=settings.SHAREIT_VERSION,
        lifespan=lifespan,
    )
    app.include_router(api.api_router)
    use_route_path_as_operation_ids(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """
        This middleware is called around each request.
        It logs the request and inject a unique identifier in the request that should be used to associate logs saved during the request.
        """
        # We generate a unique identifier for the request and save it as a state.
        # This identifier will allow combining logs associated with the same request
        # https://www.starlette.io/requests/#other-state
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        client_address = (
            f"{request.client.host}:{request.client.port}"
            if request.client is not None
            else "unknown"
        )

        response = await call_next(request)

        shareit_access_logger.info(
            f'{client_address} - "{request.method} {request.url.path}" {response.status_code} ({request_id})',
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ):
        # We use a Debug logger to log the error as personal data may be present in the request
        shareit_error_logger.debug(
            f"Validation error: {exc.errors()} ({request.state.request_id})",
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"detail": exc.errors()}),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(
        request: Request,
        exc: IntegrityError,
    ):
        shareit_error_logger.info(
            f"Integrity error: {exc.orig} ({request.state.request_id})",
        )

        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "The request conflicts with existing data"},
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(
        request: Request,
        exc: Exception,
    ):
        shareit_error_logger.exception(
            f"Unexpected error on {request.method} {request.url.path}: {exc}",
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return app
