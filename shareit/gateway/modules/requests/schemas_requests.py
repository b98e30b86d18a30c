from pydantic import field_validator

from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class ItemRequestCreate(CamelModel):
    description: str

    _check_description = field_validator("description")(validators.not_blank)
