from datetime import datetime

from pydantic import field_validator

from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class ItemRequestBase(CamelModel):
    description: str

    _normalize_description = field_validator("description")(
        validators.trailing_spaces_remover,
    )


class ItemRequest(ItemRequestBase):
    id: int
    created: datetime


class RequestItem(CamelModel):
    """An item answering a request"""

    id: int
    name: str
    owner_id: int


class ItemRequestWithItems(ItemRequest):
    items: list[RequestItem]
