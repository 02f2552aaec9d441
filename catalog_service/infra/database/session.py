"""Database engine and session management with the psycopg3 async driver."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

_FALLBACK_URL = "sqlite+aiosqlite:///./catalog.db"

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the process-wide async engine, creating it on first use.

    Falls back to a local SQLite file when no database is configured.
    """
    global _engine, _session_factory

    if _engine is None:
        db_settings = get_db_settings()
        app_settings = get_app_settings()
        if db_settings.is_configured:
            kwargs = db_settings.sqlalchemy_engine_kwargs()
            kwargs["echo"] = kwargs["echo"] or app_settings.debug
            _engine = create_async_engine(db_settings.get_sqlalchemy_url(), **kwargs)
        else:
            logger.warning(
                "Database not configured, using local SQLite",
                extra={"url": _FALLBACK_URL},
            )
            _engine = create_async_engine(_FALLBACK_URL, echo=db_settings.echo)
        _session_factory = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the process-wide engine."""
    get_engine()
    assert _session_factory is not None
    return _session_factory


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            page = await repo.paginate(session, PageOptions())
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Verify the database is reachable.

    Raises:
        sqlalchemy.exc.DBAPIError: If the connection test fails.
    """
    engine = get_engine()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"dialect": engine.dialect.name, "error": str(e)},
        )
        raise
    logger.info(
        "Database connection established successfully",
        extra={"dialect": engine.dialect.name},
    )


async def close_database() -> None:
    """Dispose the engine. Called during application shutdown."""
    global _engine, _session_factory

    if _engine is None:
        return
    logger.info("Closing database connection")
    await _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "close_database",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "init_database",
]
