from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.bookings import cruds_bookings
from shareit.types.module_user_deleter import ModuleUserDeleter


class BookingsUserDeleter(ModuleUserDeleter):
    async def delete_user(self, user_id: int, db: AsyncSession) -> None:
        await cruds_bookings.delete_bookings_by_user_id(db=db, user_id=user_id)
