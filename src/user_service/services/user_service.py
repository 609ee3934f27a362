import logging

from sqlalchemy.ext.asyncio import AsyncSession

from user_service.models.user import UserRow
from user_service.repositories.user_repository import UserRepository
from user_service.schemas.user import User

logger = logging.getLogger(__name__)


def row_to_user(row: UserRow) -> User:
    return User(
        user_name=row.user_name,
        first_name=row.first_name,
        last_name=row.last_name,
        address=row.address,
    )


class UserService:
    """
    Translates between the `User` domain value and user_table rows.

    Bound to one session through its repository; the program builds a new
    service per transaction with `UserService.for_session`.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    @classmethod
    def for_session(cls, db: AsyncSession) -> "UserService":
        return cls(UserRepository(db))

    async def insert_user(self, user: User) -> int:
        logger.info("service.insert_user", extra={"user_name": user.user_name})
        return await self.repository.insert_user(
            user_name=user.user_name,
            first_name=user.first_name,
            last_name=user.last_name,
            address=user.address,
        )

    async def get_all_users(self) -> list[User]:
        rows = await self.repository.get_all_users()
        return [row_to_user(row) for row in rows]

    async def delete_user_by_username(self, user_name: str) -> int:
        logger.info("service.delete_user", extra={"user_name": user_name})
        return await self.repository.delete_user_by_username(user_name)
