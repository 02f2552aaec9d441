"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client bound to the test database
    - Database Fixtures: in-memory SQLite engine and session
    - Pagination Fixtures: frozen clock and token codec
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("CURSOR_SIGNING_SECRET", "test-signing-secret")

TEST_SECRET = os.environ["CURSOR_SIGNING_SECRET"]
NOW = datetime(2026, 1, 1, tzinfo=UTC)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Rebuild settings and the shared codec for every test."""
    from catalog_service.core.pagination import get_cursor_codec
    from catalog_service.core.settings import clear_settings_cache

    clear_settings_cache()
    get_cursor_codec.cache_clear()
    yield
    clear_settings_cache()
    get_cursor_codec.cache_clear()


# ============================================================================
# Pagination Fixtures
# ============================================================================


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at 2026-01-01T00:00:00Z."""
    return FrozenClock(NOW)


@pytest.fixture
def codec(clock: FrozenClock):
    """Cursor codec signing with the test secret and reading the frozen clock."""
    from catalog_service.core.pagination import CursorCodec

    return CursorCodec(TEST_SECRET, clock=clock)


@pytest.fixture
def executor(codec):
    """Page executor minting tokens with the frozen-clock codec."""
    from catalog_service.core.pagination import PageExecutor

    return PageExecutor(codec)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with every catalogue table created."""
    from catalog_service.core.database import Base
    from catalog_service.features import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session on the test engine, rolled back after the test."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(db_session: AsyncSession):
    """FastAPI application whose requests use the test session."""
    from catalog_service.app.main import create_app
    from catalog_service.core.dependencies.database import get_db_session

    application = create_app()

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
