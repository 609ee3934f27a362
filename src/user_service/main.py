"""
Application factory.

    uvicorn --factory user_service.main:create_app

or `python -m user_service`, which reads HOST/PORT from settings.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.api.v1 import router as users_router, register_exception_handlers
from user_service.config.settings import Settings, get_settings
from user_service.core.logging import setup_logging, RequestIDMiddleware
from user_service.database.session import build_engine, build_session_maker, create_schema
from user_service.program.user_program import UserProgram
from user_service.utils.logging import get_project_name, get_project_version

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: defaults to get_settings()
        session_maker: use an existing pool instead of building one from
            settings. The caller then owns the engine (schema and disposal).
    """
    settings = settings or get_settings()
    setup_logging(settings)

    engine = None
    if session_maker is None:
        engine = build_engine(settings)
        session_maker = build_session_maker(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None and settings.DB_CREATE_SCHEMA:
            await create_schema(engine)
        logger.info("Application started", extra={"env": settings.ENV})
        yield
        if engine is not None:
            await engine.dispose()
        logger.info("Application stopped")

    app = FastAPI(title=get_project_name(), version=get_project_version(), lifespan=lifespan)
    app.state.user_program = UserProgram(session_maker)

    app.add_middleware(RequestIDMiddleware)
    app.include_router(users_router)
    register_exception_handlers(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok"}

    return app
