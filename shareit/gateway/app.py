"""Factory of the gateway application, validating requests before forwarding them to the ShareIt server"""

import logging
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shareit.core.utils.config import GatewaySettings
from shareit.core.utils.log import LogConfig
from shareit.gateway import api
from shareit.gateway.dependencies import disconnect_gateway_state, init_gateway_state
from shareit.gateway.state import GatewayLifespanState
from shareit.utils.tools import use_route_path_as_operation_ids


def get_application(settings: GatewaySettings) -> FastAPI:
    # Initialize loggers
    LogConfig().initialize_loggers(settings=settings)

    shareit_access_logger = logging.getLogger("shareit.access")
    shareit_error_logger = logging.getLogger("shareit.error")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[GatewayLifespanState, None]:
        shareit_error_logger.info("Startup: Initializing gateway")

        state: GatewayLifespanState = await app.dependency_overrides.get(
            init_gateway_state,
            init_gateway_state,
        )(
            app=app,
            settings=settings,
            shareit_error_logger=shareit_error_logger,
        )

        yield state

        shareit_error_logger.info("Shutting down")
        await disconnect_gateway_state(
            state=state,
            shareit_error_logger=shareit_error_logger,
        )

    app = FastAPI(
        title="ShareIt gateway",
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
        Log each request and inject a unique identifier in its state
        """
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
        # Invalid requests are never forwarded to the server
        shareit_error_logger.debug(
            f"Validation error: {exc.errors()} ({request.state.request_id})",
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"detail": exc.errors()}),
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
