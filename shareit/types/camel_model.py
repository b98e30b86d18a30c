from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema for the JSON API: fields are exposed in camelCase (`owner_id` -> `ownerId`).

    Both the alias and the python name are accepted as input.
    FastAPI serializes responses by alias, the gateway must use `model_dump(by_alias=True)` when forwarding a body.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
