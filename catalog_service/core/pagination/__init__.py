"""Keyset pagination with signed continuation tokens.

Pieces, leaves first:

- ``CursorCodec``: signed, expiring, sort-bound continuation tokens
- ``FilterComposer``: options to predicates
- ``KeysetSortStrategy`` / ``keyset_predicate``: order and seek conditions
- ``PageExecutor``: one over-fetching query per page
- ``PaginatedRepository``: per-entity entry point

REST usage:
    @router.get("/tags", response_model=CursorPage[TagRead])
    async def list_tags(options: TagListOptions = Depends(tag_list_options), ...):
        page = await repo.paginate(session, options)
        return CursorPage.from_result(page, TagRead.model_validate)

Tokens are opaque to clients, which pass ``nextCursor`` back unchanged.
"""

from catalog_service.core.pagination.cursor import (
    DEV_SIGNING_SECRET,
    CursorCodec,
    get_cursor_codec,
)
from catalog_service.core.pagination.executor import (
    EntitySource,
    PageExecutor,
    RowSource,
)
from catalog_service.core.pagination.filters import (
    FilterComposer,
    ilike_pattern,
    is_defined,
    normalize_search,
)
from catalog_service.core.pagination.repository import PagePlan, PaginatedRepository
from catalog_service.core.pagination.schemas import CursorPage, PageOptions
from catalog_service.core.pagination.sorting import (
    KeysetSortStrategy,
    KeysetTerm,
    SortField,
    Sorter,
    keyset_predicate,
)
from catalog_service.core.pagination.types import (
    CursorRejection,
    CursorScalar,
    CursorState,
    CursorValidation,
    PageResult,
    QueryStrategy,
    SortConfig,
    SortOrder,
)

__all__ = [
    "DEV_SIGNING_SECRET",
    "CursorCodec",
    "CursorPage",
    "CursorRejection",
    "CursorScalar",
    "CursorState",
    "CursorValidation",
    "EntitySource",
    "FilterComposer",
    "KeysetSortStrategy",
    "KeysetTerm",
    "PageExecutor",
    "PageOptions",
    "PagePlan",
    "PageResult",
    "PaginatedRepository",
    "QueryStrategy",
    "RowSource",
    "SortConfig",
    "SortField",
    "SortOrder",
    "Sorter",
    "get_cursor_codec",
    "ilike_pattern",
    "is_defined",
    "keyset_predicate",
    "normalize_search",
]
