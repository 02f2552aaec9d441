"""Repository for the tags feature."""

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
from catalog_service.features.tags.models import Tag
from catalog_service.features.tags.schemas import TagListOptions

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

TAG_SORT = KeysetSortStrategy(
    id_column=Tag.id,
    fields={
        "name": SortField(Tag.name, "name"),
        "createdAt": SortField(Tag.created_at, "createdAt", "desc"),
    },
    fallback=[SortField(Tag.name, "name")],
)


class TagFilters(FilterComposer[TagListOptions]):
    """Search on name and slug; optional type filter."""

    def build_search_filter(self, options: TagListOptions) -> ColumnElement[bool] | None:
        pattern = ilike_pattern(options.search)
        if pattern is None:
            return None
        return or_(Tag.name.ilike(pattern), Tag.slug.ilike(pattern))

    def build_entity_filters(self, options: TagListOptions) -> list[ColumnElement[bool]]:
        if is_defined(options.type):
            return [Tag.type == str(options.type)]
        return []


class TagRepository(PaginatedRepository[Tag, TagListOptions]):
    """Repository for the Tag model.

    Inherits from PaginatedRepository:
        - paginate(session, options) -> PageResult[Tag]
        - get(session, id) -> Tag | None
        - get_or_raise(session, id) -> Tag
        - get_by(session, attr, value) -> Tag | None
        - create(session, instance) -> Tag
        - create_many(session, instances) -> Sequence[Tag]
    """

    def __init__(self) -> None:
        """Initialize with Tag model, sorted by name by default."""
        super().__init__(Tag, filters=TagFilters(), sorter=TAG_SORT, default_sort_by="name")


# Factory function for dependency injection
_tag_repository: TagRepository | None = None


def get_tag_repository() -> TagRepository:
    """Get TagRepository instance.

    Usage in FastAPI routes:
        @router.get("")
        async def list_tags(
            session: AsyncSession = Depends(get_db_session),
            repo: TagRepository = Depends(get_tag_repository),
        ):
            return await repo.paginate(session, TagListOptions())
    """
    global _tag_repository
    if _tag_repository is None:
        _tag_repository = TagRepository()
    return _tag_repository


__all__ = ["TAG_SORT", "TagFilters", "TagRepository", "get_tag_repository"]
