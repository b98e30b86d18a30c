from pydantic import field_validator

from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class UserBase(CamelModel):
    """Base schema for user's model"""

    name: str
    email: str

    _normalize_name = field_validator("name")(validators.trailing_spaces_remover)
    _normalize_email = field_validator("email")(validators.email_normalizer)


class UserUpdate(CamelModel):
    """Schema for user update, only given fields are changed"""

    name: str | None = None
    email: str | None = None

    _normalize_name = field_validator("name")(validators.trailing_spaces_remover)
    _normalize_email = field_validator("email")(validators.email_normalizer)


class User(UserBase):
    id: int


class UserSimple(CamelModel):
    """Public information about a user, embedded in other objects"""

    id: int
    name: str
