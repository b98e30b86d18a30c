from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.types.sqlalchemy import Base, PrimaryKey

if TYPE_CHECKING:
    from shareit.server.modules.items.models_items import Item


class ItemRequest(Base):
    __tablename__ = "item_request"

    id: Mapped[PrimaryKey] = mapped_column(init=False)
    description: Mapped[str]
    requestor_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    created: Mapped[datetime]

    # Items listed by their owners as an answer to the request
    items: Mapped[list["Item"]] = relationship(
        "Item",
        lazy="selectin",
        viewonly=True,
        init=False,
        default_factory=list,
    )
