from datetime import datetime

from pydantic import field_validator

from shareit.server.modules.bookings.schemas_bookings import Booking
from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class ItemBase(CamelModel):
    """Base schema for item's model"""

    name: str
    description: str
    available: bool
    request_id: int | None = None

    _normalize_name = field_validator("name")(validators.trailing_spaces_remover)


class ItemUpdate(CamelModel):
    """Schema for item update, only given fields are changed"""

    name: str | None = None
    description: str | None = None
    available: bool | None = None

    _normalize_name = field_validator("name")(validators.trailing_spaces_remover)


class Item(ItemBase):
    id: int
    owner_id: int


class CommentBase(CamelModel):
    text: str


class Comment(CommentBase):
    id: int
    author_name: str
    created: datetime


class ItemWithBookings(Item):
    """
    An item with its comments. The last and next approved bookings are only given to the owner of the item
    """

    last_booking: Booking | None = None
    next_booking: Booking | None = None
    comments: list[Comment] = []
