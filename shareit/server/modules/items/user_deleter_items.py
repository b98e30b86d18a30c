from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.items import cruds_items
from shareit.types.module_user_deleter import ModuleUserDeleter


class ItemsUserDeleter(ModuleUserDeleter):
    async def delete_user(self, user_id: int, db: AsyncSession) -> None:
        await cruds_items.delete_items_by_owner_id(db=db, owner_id=user_id)
