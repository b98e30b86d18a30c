from datetime import datetime

from pydantic import field_validator, model_validator

from shareit.types.camel_model import CamelModel
from shareit.utils import validators


class BookingCreate(CamelModel):
    item_id: int
    start: datetime
    end: datetime

    _utc_start = field_validator("start")(validators.utc_if_naive)
    _utc_end = field_validator("end")(validators.utc_if_naive)

    @model_validator(mode="after")
    def check_end_after_start(self) -> "BookingCreate":
        if self.end <= self.start:
            raise ValueError("The end of a booking must be after its start")  # noqa: TRY003
        return self
