"""Repository for the stacks feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import or_

from catalog_service.core.pagination import (
    FilterComposer,
    KeysetSortStrategy,
    PaginatedRepository,
    SortField,
    ilike_pattern,
    is_defined,
)
from catalog_service.features.stacks.models import Stack
from catalog_service.features.stacks.schemas import StackListOptions

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession

# Not a configured field: requests without sortBy get the fallback order
CURATED_SORT = "curated"

STACK_SORT = KeysetSortStrategy(
    id_column=Stack.id,
    fields={
        "name": SortField(Stack.name, "name"),
        "slug": SortField(Stack.slug, "slug"),
        "weight": SortField(Stack.weight, "weight"),
        "createdAt": SortField(Stack.created_at, "createdAt", "desc"),
    },
    fallback=[
        SortField(Stack.weight, "weight"),
        SortField(Stack.name, "name"),
    ],
)


class StackFilters(FilterComposer[StackListOptions]):
    def build_search_filter(self, options: StackListOptions) -> ColumnElement[bool] | None:
        pattern = ilike_pattern(options.search)
        if pattern is None:
            return None
        return or_(
            Stack.name.ilike(pattern),
            Stack.slug.ilike(pattern),
            Stack.description.ilike(pattern),
        )

    def build_entity_filters(self, options: StackListOptions) -> list[ColumnElement[bool]]:
        if is_defined(options.parent_id):
            return [Stack.parent_id == options.parent_id]
        return []


class StackRepository(PaginatedRepository[Stack, StackListOptions]):
    """Repository for the Stack model."""

    def __init__(self) -> None:
        super().__init__(
            Stack,
            filters=StackFilters(),
            sorter=STACK_SORT,
            default_sort_by=CURATED_SORT,
        )

    async def get_by_slug(self, session: AsyncSession, slug: str) -> Stack | None:
        stack = await self.get_by(session, Stack.slug, slug)
        self._lazy.debug(lambda: f"db.get_by_slug({slug!r}) -> {stack is not None}")
        return stack


# Factory function for dependency injection
_stack_repository: StackRepository | None = None


def get_stack_repository() -> StackRepository:
    """Get StackRepository instance."""
    global _stack_repository
    if _stack_repository is None:
        _stack_repository = StackRepository()
    return _stack_repository


__all__ = ["STACK_SORT", "StackFilters", "StackRepository", "get_stack_repository"]
