import datetime
from collections.abc import Callable
from typing import Annotated

from sqlalchemy import DateTime, types
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass, mapped_column
from sqlalchemy.types import TypeDecorator

from shareit.types.exceptions import MissingTZInfoInDatetimeError


class TZDateTime(TypeDecorator):
    """
    Custom SQLAlchemy type for storing timezone-aware timestamps as timezone-naive UTC timestamps.
    We use this custom type because sqlite doesn't support datetime with timezone
    See https://docs.sqlalchemy.org/en/20/core/custom_types.html#store-timezone-aware-timestamps-as-timezone-naive-utc
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            if not value.tzinfo or value.tzinfo.utcoffset(value) is None:
                raise MissingTZInfoInDatetimeError()
            value = value.astimezone(datetime.UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=datetime.UTC)
        return value


# Auto-incremented integer primary key. As the value is set by the database on flush,
# models declare it with `mapped_column(init=False)` so it is left out of the dataclass constructor
PrimaryKey = Annotated[int, mapped_column(primary_key=True)]

SessionLocalType = Callable[[], AsyncSession]


class Base(MappedAsDataclass, DeclarativeBase):
    """Base class for all models.

    The type map is overriden to use our custom datetime type (see https://docs.sqlalchemy.org/en/20/orm/declarative_tables.html#customizing-the-type-map)"""

    type_annotation_map = {
        bool: types.Boolean(),
        datetime.datetime: TZDateTime(),
        str: types.String(),
    }
