from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from shareit.gateway import app as gateway_app
from shareit.gateway import dependencies as gateway_dependencies
from shareit.server.app import get_application
from shareit.server.dependencies import get_settings, init_app_state
from tests.commons import (
    gateway_settings,
    override_get_gateway_settings,
    override_get_settings,
    override_init_app_state,
    settings,
)


@pytest.fixture(scope="module", autouse=True)
def client() -> Generator[TestClient, None, None]:
    test_app = get_application(settings=settings, drop_db=True)  # Create the test's app

    test_app.dependency_overrides[init_app_state] = override_init_app_state
    test_app.dependency_overrides[get_settings] = override_get_settings

    # The TestClient should be used as a context manager in order for the lifespan to be called
    # See https://www.starlette.io/lifespan/#running-lifespan-in-tests
    with TestClient(test_app) as client:
        yield client


@pytest.fixture(scope="module")
def gateway_client() -> Generator[TestClient, None, None]:
    """
    The gateway application. Tests override its HTTP clients, nothing reaches a real server.
    """
    test_app = gateway_app.get_application(settings=gateway_settings)
    test_app.dependency_overrides[gateway_dependencies.get_settings] = (
        override_get_gateway_settings
    )

    with TestClient(test_app) as client:
        yield client
        test_app.dependency_overrides.clear()
