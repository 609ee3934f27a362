import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from user_service.config.settings import Settings
from .base import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine (and with it the connection pool) from settings.

    Pool sizing bounds how many requests can hold a connection at once.
    SQLite uses its own pool class, so the sizing knobs only apply to
    server databases.
    """
    options: dict = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": True,          # Enables connection health checks
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    engine = create_async_engine(settings.DATABASE_URL, **options)
    logger.debug("database.engine_created", extra={"dialect": engine.dialect.name})
    return engine


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps loaded rows usable after the transaction ends.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (no-op for existing tables)."""
    # Import models so they register themselves with Base.metadata.
    from user_service import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database.schema_created", extra={"tables": sorted(Base.metadata.tables)})
