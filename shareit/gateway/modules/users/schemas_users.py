from pydantic import EmailStr, field_validator

from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class UserCreate(CamelModel):
    name: str
    email: EmailStr

    _check_name = field_validator("name")(validators.not_blank)


class UserUpdate(CamelModel):
    """Only given fields are validated and forwarded"""

    name: str | None = None
    email: EmailStr | None = None

    _check_name = field_validator("name")(validators.not_blank)
