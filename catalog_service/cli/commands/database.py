"""Database management commands.

Example:bash
    # Verify connectivity
    catalog-service db init

    # Create all catalogue tables that do not exist yet
    catalog-service db create-tables
"""

import sys

import click
from sqlalchemy import text

from catalog_service.cli.utils import coro, error, info, success
from catalog_service.core.settings import get_db_settings


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Initialize database connection and verify connectivity."""
    from catalog_service.infra.database import close_database, get_async_session

    settings = get_db_settings()
    if settings.is_configured:
        info(f"Connecting to: {settings.host}:{settings.port}/{settings.name}")
    else:
        info("Connecting to: SQLite fallback")

    try:
        async with get_async_session() as session:
            await session.execute(text("SELECT 1"))
        success("Database connected successfully!")
    except Exception as e:
        error(f"Database connection failed: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command(name="create-tables")
@coro
async def create_tables() -> None:
    """Create every catalogue table that does not exist yet."""
    from catalog_service.core.database import Base
    from catalog_service.features import models  # noqa: F401
    from catalog_service.infra.database import close_database, get_engine

    engine = get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        success(f"Created {len(Base.metadata.tables)} tables (existing tables left untouched)")
    finally:
        await close_database()


__all__ = ["db"]
