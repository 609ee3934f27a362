"""
Core pytest configuration shared by every test module.

Only the database setup and settings live here. Layer-specific fixtures are
in tests/test_fixtures/ and imported at the bottom of this file so they are
available everywhere.
"""

from __future__ import annotations

import os
import logging
from typing import AsyncGenerator
from urllib.parse import urlparse

# Silence noisy third-party loggers before they are imported.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from user_service.config.settings import Settings
from user_service.core.logging.builder import setup_logging
from user_service.database.base import Base
from user_service.database.session import build_session_maker
from user_service.models import UserRow  # noqa: F401 (registers user_table on Base.metadata)

logger = logging.getLogger(__name__)


def make_test_settings(**overrides) -> Settings:
    """Settings for tests: never reads a developer's .env file."""
    values = {
        "ENV": "testing",
        "LOG_FORMAT": "text",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_STDOUT": True,
        "DATABASE_URL_OVERRIDE": "sqlite+aiosqlite:///./test_users.db",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Install the application logging config once for the session."""
    setup_logging(make_test_settings())
    yield


def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials, for logs."""
    parsed = urlparse(db_url)
    if parsed.scheme.startswith("sqlite"):
        return db_url
    return f"{parsed.scheme}://{parsed.hostname}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(tmp_path) -> str:
    """
    1. TEST_DATABASE_URL (e.g. a Postgres started by CI)
    2. a throwaway SQLite file under the test's tmp_path
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return f"sqlite+aiosqlite:///{tmp_path / 'test_users.db'}"


@pytest.fixture
def test_database_url(tmp_path) -> str:
    url = get_test_database_url(tmp_path)
    logger.debug("Using test DB: %s", safe_log_db_url(url))
    return url


@pytest.fixture
def test_settings(test_database_url) -> Settings:
    return make_test_settings(DATABASE_URL_OVERRIDE=test_database_url)


@pytest.fixture
async def async_engine(test_database_url) -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine with a freshly created user_table, dropped again at teardown.

    Function-scoped: pytest-asyncio gives each test its own event loop and
    pooled connections must not outlive it.
    """
    engine = create_async_engine(test_database_url, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(async_engine)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """
    A session whose work is rolled back at the end of the test.
    Repository tests use it; they never commit.
    """
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


# Layer fixtures, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402
    fake,
    user_repository,
    user_service,
    make_user,
    sample_user,
    create_user,
    multiple_users,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    stub_program,
    stub_client,
    app_log_records,
    user_program,
    api_client,
)
