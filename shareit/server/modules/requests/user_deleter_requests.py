from sqlalchemy.ext.asyncio import AsyncSession

from shareit.server.modules.requests import cruds_requests
from shareit.types.module_user_deleter import ModuleUserDeleter


class RequestsUserDeleter(ModuleUserDeleter):
    async def delete_user(self, user_id: int, db: AsyncSession) -> None:
        await cruds_requests.delete_requests_by_requestor_id(
            db=db,
            requestor_id=user_id,
        )
