"""Repository for the categories feature."""

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
from catalog_service.features.categories.models import Category
from catalog_service.features.categories.schemas import CategoryListOptions

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession

# Not a configured field: requests without sortBy get the fallback order
CURATED_SORT = "curated"

CATEGORY_SORT = KeysetSortStrategy(
    id_column=Category.id,
    fields={
        "name": SortField(Category.name, "name"),
        "slug": SortField(Category.slug, "slug"),
        "weight": SortField(Category.weight, "weight"),
        "createdAt": SortField(Category.created_at, "createdAt", "desc"),
    },
    fallback=[
        SortField(Category.weight, "weight"),
        SortField(Category.name, "name"),
    ],
)


class CategoryFilters(FilterComposer[CategoryListOptions]):
    """Search on name, slug and description; optional parent filter."""

    def build_search_filter(self, options: CategoryListOptions) -> ColumnElement[bool] | None:
        pattern = ilike_pattern(options.search)
        if pattern is None:
            return None
        return or_(
            Category.name.ilike(pattern),
            Category.slug.ilike(pattern),
            Category.description.ilike(pattern),
        )

    def build_entity_filters(self, options: CategoryListOptions) -> list[ColumnElement[bool]]:
        if is_defined(options.parent_id):
            return [Category.parent_id == options.parent_id]
        return []


class CategoryRepository(PaginatedRepository[Category, CategoryListOptions]):
    """Repository for the Category model.

    Inherits from PaginatedRepository:
        - paginate(session, options) -> PageResult[Category]
        - get(session, id) -> Category | None
        - get_or_raise(session, id) -> Category
        - get_by(session, attr, value) -> Category | None
    """

    def __init__(self) -> None:
        """Initialize with Category model, in curated (weight, name) order by default."""
        super().__init__(
            Category,
            filters=CategoryFilters(),
            sorter=CATEGORY_SORT,
            default_sort_by=CURATED_SORT,
        )

    async def get_by_slug(self, session: AsyncSession, slug: str) -> Category | None:
        """Get a category by its slug."""
        category = await self.get_by(session, Category.slug, slug)
        self._lazy.debug(lambda: f"db.get_by_slug({slug!r}) -> {category is not None}")
        return category


# Factory function for dependency injection
_category_repository: CategoryRepository | None = None


def get_category_repository() -> CategoryRepository:
    """Get CategoryRepository instance."""
    global _category_repository
    if _category_repository is None:
        _category_repository = CategoryRepository()
    return _category_repository


__all__ = [
    "CATEGORY_SORT",
    "CategoryFilters",
    "CategoryRepository",
    "get_category_repository",
]
