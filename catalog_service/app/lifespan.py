"""Application lifespan management.

Startup order:
1. Logging
2. Cursor codec (fails fast when production has no signing secret)
3. Database, when configured

Shutdown runs in reverse.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from catalog_service.core.pagination import get_cursor_codec
from catalog_service.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
)
from catalog_service.infra.database import close_database, init_database
from catalog_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging and build the continuation token codec."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )

    codec = get_cursor_codec()
    logger.info(
        "Cursor codec ready",
        extra={"ttl_seconds": int(codec.ttl.total_seconds())},
    )


async def _startup_database() -> None:
    """Check the database connection when one is configured."""
    db = get_db_settings()
    if not db.is_configured:
        logger.info("Database not configured, using the local SQLite fallback")
        return

    try:
        await init_database()
    except Exception as e:
        logger.warning(
            "Database unavailable, continuing in degraded mode",
            extra={"error": str(e)},
        )


async def _shutdown_database() -> None:
    await close_database()
    logger.info("Database connection closed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_database()

    yield

    await _shutdown_database()
    logger.info("Application stopped")


__all__ = ["lifespan"]
