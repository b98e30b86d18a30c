from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.server.modules.items.models_items import Item
from shareit.server.modules.users.models_users import User
from shareit.types.bookings_type import BookingStatus
from shareit.types.sqlalchemy import Base, PrimaryKey


class Booking(Base):
    __tablename__ = "booking"

    id: Mapped[PrimaryKey] = mapped_column(init=False)
    start: Mapped[datetime]
    end: Mapped[datetime]
    item_id: Mapped[int] = mapped_column(ForeignKey("item.id"), index=True)
    booker_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    status: Mapped[BookingStatus]

    item: Mapped[Item] = relationship(Item, lazy="joined", init=False)
    booker: Mapped[User] = relationship(User, lazy="joined", init=False)
