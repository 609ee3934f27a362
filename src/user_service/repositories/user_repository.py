"""
User repository: the three statements the service needs against user_table.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from user_service.models.user import UserRow
from .base_repository import BaseRepository


class UserRepository(BaseRepository[UserRow]):
    """
    Repository for user_table.

    Database errors (a duplicate user_name raising IntegrityError, for one)
    surface unchanged.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(UserRow, db)

    async def insert_user(
        self,
        user_name: str,
        first_name: str,
        last_name: str,
        address: str | None = None,
    ) -> int:
        """
        Insert one user row.

        Returns:
            Number of rows written (1 on success)

        Raises:
            IntegrityError: when user_name is already taken
        """
        return await self.insert_values(
            user_name=user_name,
            first_name=first_name,
            last_name=last_name,
            address=address,
        )

    async def get_all_users(self) -> Sequence[UserRow]:
        return await self.select_all()

    async def delete_user_by_username(self, user_name: str) -> int:
        """
        Delete the row for `user_name`.

        Returns:
            Number of rows removed: 1 when the user existed, 0 otherwise
        """
        return await self.delete_where("user_name", user_name)
