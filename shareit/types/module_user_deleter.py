from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession


class ModuleUserDeleter(ABC):
    """
    Abstract base class for user deletion functionality.
    Each module owning rows that reference a user should implement this interface
    to remove them before the user itself is deleted.
    """

    @abstractmethod
    async def delete_user(self, user_id: int, db: AsyncSession) -> None:
        """
        Delete the module's data referencing the user.
        :param user_id: The ID of the user to delete.
        """
