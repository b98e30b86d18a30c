from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.server.modules.users.models_users import User
from shareit.types.sqlalchemy import Base, PrimaryKey


class Item(Base):
    __tablename__ = "item"

    id: Mapped[PrimaryKey] = mapped_column(init=False)
    name: Mapped[str]
    description: Mapped[str]
    available: Mapped[bool]
    owner_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    # The request the item was listed for, if any
    request_id: Mapped[int | None] = mapped_column(
        ForeignKey("item_request.id"),
        index=True,
        default=None,
    )


class Comment(Base):
    __tablename__ = "comment"

    id: Mapped[PrimaryKey] = mapped_column(init=False)
    text: Mapped[str]
    item_id: Mapped[int] = mapped_column(ForeignKey("item.id"), index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    created: Mapped[datetime]

    author: Mapped[User] = relationship(User, lazy="joined", init=False)
