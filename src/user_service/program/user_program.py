"""
Program layer: one transaction per operation.

Each public method opens a session from the pool, runs the service inside a
single transaction (commit on success, rollback on any failure) and turns
low-level outcomes into typed service errors:

| Outcome                          | Error                      |
| -------------------------------- | -------------------------- |
| unique violation on insert       | UserAlreadyExistsError     |
| insert wrote != 1 row            | UserNotInsertedError       |
| delete matched 0 rows            | UserAlreadyDeletedError    |
| any other database failure       | DatabaseTransactionError   |

Repositories only ever report counts; this is the one place where counts
become errors.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.exceptions.base import UserNotInsertedError, UserAlreadyDeletedError
from user_service.exceptions.mapper import db_error_handler
from user_service.schemas.user import User
from user_service.services.user_service import UserService

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[AsyncSession], UserService]


class UserProgram:

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        service_factory: ServiceFactory = UserService.for_session,
    ):
        self.session_maker = session_maker
        self.service_factory = service_factory

    @asynccontextmanager
    async def transaction(self, operation: str, user_name: str | None = None) -> AsyncIterator[UserService]:
        """
        Yield a service bound to a fresh session inside `session.begin()`.

        The error handler sits outside the transaction so failures raised by
        the commit itself are mapped too.
        """
        async with db_error_handler(operation, user_name):
            async with self.session_maker() as session:
                async with session.begin():
                    yield self.service_factory(session)

    async def insert_user(self, user: User) -> int:
        """
        Raises:
            UserAlreadyExistsError: user_name is taken
            UserNotInsertedError: the insert did not write exactly one row
            DatabaseTransactionError: any other database failure
        """
        async with self.transaction("insert_user", user.user_name) as service:
            count = await service.insert_user(user)
            if count != 1:
                # raising inside the block rolls the transaction back
                logger.warning("program.insert_user.unexpected_rowcount", extra={"rowcount": count})
                raise UserNotInsertedError("failed to insert the user")

        logger.info("program.insert_user.committed", extra={"user_name": user.user_name})
        return count

    async def get_all_users(self) -> list[User]:
        async with self.transaction("get_all_users") as service:
            return await service.get_all_users()

    async def delete_user_by_username(self, user_name: str) -> int:
        """
        Raises:
            UserAlreadyDeletedError: no row matched user_name
            DatabaseTransactionError: any database failure
        """
        async with self.transaction("delete_user_by_username", user_name) as service:
            count = await service.delete_user_by_username(user_name)
            if count == 0:
                logger.info("program.delete_user.no_match", extra={"user_name": user_name})
                raise UserAlreadyDeletedError("already deleted")

        logger.info("program.delete_user.committed", extra={"user_name": user_name, "rowcount": count})
        return count
