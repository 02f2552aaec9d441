"""Minimal generic repository for SQLAlchemy models.

Provides basic lookups and inserts with explicit session passing.
List operations live on ``PaginatedRepository``, which builds on this class.

Example:
    class CategoryRepository(BaseRepository[Category]):
        async def find_by_slug(self, session: AsyncSession, slug: str) -> Category | None:
            return await self.get_by(session, Category.slug, slug)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from catalog_service.core.database.exceptions import NotFoundError
from catalog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute


class BaseRepository[T]:
    """Minimal generic repository.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - create(session, instance) -> T
        - create_many(session, instances) -> Sequence[T]

    Session is always explicit. For queries not covered here, use the
    session directly.
    """

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Tool, Category)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            options: SQLAlchemy loader options (e.g., selectinload)

        Returns:
            Entity if found, None otherwise
        """
        if options:
            stmt = select(self.model).where(self.model.id == id).options(*options)  # type: ignore[attr-defined]
            result = await session.execute(stmt)
            instance = result.scalar_one_or_none()
        else:
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by arbitrary attribute.

        Args:
            session: Database session
            attr: Model attribute to filter by (e.g., Tool.slug)
            value: Value to match
            options: SQLAlchemy loader options

        Returns:
            First matching entity or None
        """
        stmt = select(self.model).where(attr == value)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        instance = result.scalars().first()

        found = "found" if instance else "not found"
        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {found}"
        )
        return instance

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values and refreshes.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(
        self, session: AsyncSession, instances: Sequence[T]
    ) -> Sequence[T]:
        """Persist multiple entities in one flush."""
        session.add_all(instances)
        await session.flush()
        self._lazy.debug(
            lambda: f"db.create_many: {self.model.__name__} x{len(instances)}"
        )
        return instances


__all__ = ["BaseRepository"]
