from sqlalchemy.orm import Mapped, mapped_column

from shareit.types.sqlalchemy import Base, PrimaryKey


class User(Base):
    __tablename__ = "user"

    id: Mapped[PrimaryKey] = mapped_column(init=False)
    name: Mapped[str]
    email: Mapped[str] = mapped_column(unique=True, index=True)
