"""File used by Uvicorn to start the gateway."""

from shareit.gateway.app import get_application
from shareit.gateway.dependencies import get_settings

app = get_application(settings=get_settings())
