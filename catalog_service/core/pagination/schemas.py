"""Page request and response schemas.

``PageOptions`` is the validated page request every paginated repository
accepts; entities subclass it with their filter fields and sort keys.
``CursorPage`` is the JSON shape returned by list endpoints:

    {"items": [...], "nextCursor": "eyJpZCI6...", "hasMore": true}
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_service.core.pagination.types import PageResult, SortOrder

T = TypeVar("T")
S = TypeVar("S")


class PageOptions(BaseModel):
    """Common page request fields.

    Attributes:
        limit: Requested page size; clamped by the repository.
        cursor: Continuation token from the previous page.
        sort_by: Sort key; unknown keys use the entity's fixed default order.
        sort_order: Sort direction; the sort field's default when omitted.
        search: Free-text search; blank means no search.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    limit: int | None = Field(default=None, description="Page size (clamped)")
    cursor: str | None = Field(default=None, description="Continuation token")
    sort_by: str | None = Field(default=None, description="Sort key")
    sort_order: SortOrder | None = Field(default=None, description="asc or desc")
    search: str | None = Field(default=None, max_length=200, description="Free-text search")


class CursorPage(BaseModel, Generic[T]):
    """REST-style cursor pagination response.

    Usage:
        @router.get("/tags", response_model=CursorPage[TagRead])
        async def list_tags(...) -> CursorPage[TagRead]:
            page = await repo.paginate(session, options)
            return CursorPage.from_result(page, TagRead.model_validate)

    Attributes:
        items: Items on this page
        next_cursor: Token for the next page (None on the last page)
        has_more: Whether more items exist after this page
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    items: list[T] = Field(default_factory=list, description="List of items")
    next_cursor: str | None = Field(default=None, description="Cursor to fetch next page")
    has_more: bool = Field(default=False, description="Whether more items exist")

    @classmethod
    def from_result(
        cls,
        result: PageResult[S],
        convert: Callable[[S], T],
    ) -> CursorPage[T]:
        """Build a response page from a repository result."""
        return cls(
            items=[convert(item) for item in result.items],
            next_cursor=result.next_cursor,
            has_more=result.has_more,
        )


__all__ = ["CursorPage", "PageOptions"]
