import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from user_service.models.user import UserRow
from user_service.repositories.user_repository import UserRepository
from user_service.schemas.user import User


async def _insert(repo: UserRepository, user: User) -> int:
    return await repo.insert_user(
        user_name=user.user_name,
        first_name=user.first_name,
        last_name=user.last_name,
        address=user.address,
    )


@pytest.mark.asyncio
class TestUserRepositoryInsert:
    """
    insert_user() writes one row and reports the affected-row count.
    Database errors are not caught or re-typed here.
    """

    async def test_insert_user_with_address(self, user_repository: UserRepository, db_session):
        user = User(user_name="LimbMissing", first_name="David", last_name="Pratt", address="Address String")

        count = await _insert(user_repository, user)

        assert count == 1
        rows = (await db_session.execute(select(UserRow))).scalars().all()
        assert len(rows) == 1
        row = rows[0]
        assert row.user_name == user.user_name
        assert row.first_name == user.first_name
        assert row.last_name == user.last_name
        assert row.address == "Address String"

    async def test_insert_user_without_address(self, user_repository: UserRepository, db_session, sample_user: User):
        await _insert(user_repository, sample_user)

        rows = (await db_session.execute(select(UserRow))).scalars().all()
        assert len(rows) == 1
        assert rows[0].user_name == "LimbMissing"
        assert rows[0].address is None

    async def test_duplicate_user_name_raises_integrity_error(self, user_repository: UserRepository, sample_user: User):
        """
        The unique constraint fires and the raw IntegrityError reaches the caller.
        """
        await _insert(user_repository, sample_user)

        with pytest.raises(IntegrityError):
            await _insert(user_repository, sample_user)

    async def test_same_names_different_user_name_is_allowed(self, user_repository: UserRepository, sample_user: User):
        other = sample_user.model_copy(update={"user_name": "LimbMissing2"})

        assert await _insert(user_repository, sample_user) == 1
        assert await _insert(user_repository, other) == 1


@pytest.mark.asyncio
class TestUserRepositoryRead:

    async def test_get_all_users_empty(self, user_repository: UserRepository):
        assert list(await user_repository.get_all_users()) == []

    async def test_get_all_users_returns_every_row_in_insert_order(self, user_repository: UserRepository):
        users = [
            User(user_name="LimbMissing1", first_name="David", last_name="Pratt"),
            User(user_name="LimbMissing2", first_name="David", last_name="Pratt"),
            User(user_name="LimbMissing3", first_name="David", last_name="Pratt", address="Address String"),
        ]
        for user in users:
            await _insert(user_repository, user)

        rows = await user_repository.get_all_users()

        assert len(rows) == 3
        assert [r.user_name for r in rows] == ["LimbMissing1", "LimbMissing2", "LimbMissing3"]
        assert rows[2].address == "Address String"


@pytest.mark.asyncio
class TestUserRepositoryDelete:

    async def test_delete_existing_user_returns_one(self, user_repository: UserRepository, sample_user: User):
        await _insert(user_repository, sample_user)

        assert await user_repository.delete_user_by_username("LimbMissing") == 1
        assert list(await user_repository.get_all_users()) == []

    async def test_delete_missing_user_returns_zero(self, user_repository: UserRepository):
        assert await user_repository.delete_user_by_username("LimbMissing") == 0

    async def test_delete_only_touches_matching_user(self, user_repository: UserRepository, multiple_users: list[User]):
        target = multiple_users[1]

        assert await user_repository.delete_user_by_username(target.user_name) == 1

        remaining = [r.user_name for r in await user_repository.get_all_users()]
        assert remaining == [multiple_users[0].user_name, multiple_users[2].user_name]

    async def test_delete_where_rejects_unknown_column(self, user_repository: UserRepository):
        with pytest.raises(AttributeError):
            await user_repository.delete_where("email", "x@example.com")
