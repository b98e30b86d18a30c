from pydantic import field_validator

from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class ItemCreate(CamelModel):
    name: str
    description: str
    available: bool
    request_id: int | None = None

    _check_name = field_validator("name")(validators.not_blank)
    _check_description = field_validator("description")(validators.not_blank)


class ItemUpdate(CamelModel):
    """Only given fields are validated and forwarded"""

    name: str | None = None
    description: str | None = None
    available: bool | None = None

    _check_name = field_validator("name")(validators.not_blank)
    _check_description = field_validator("description")(validators.not_blank)


class CommentCreate(CamelModel):
    text: str

    _check_text = field_validator("text")(validators.not_blank)
