"""API router for the tags feature.

Endpoints:
    GET /tags   - Cursor-paginated tag listing, optionally by type
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.pagination import CursorPage, SortOrder  # noqa: TC001
from catalog_service.features.tags.models import TagType  # noqa: TC001
from catalog_service.features.tags.repository import TagRepository, get_tag_repository
from catalog_service.features.tags.schemas import TagListOptions, TagRead, TagSortKey

router = APIRouter(prefix="/tags", tags=["tags"])


def tag_list_options(
    limit: Annotated[int | None, Query(description="Page size, clamped to [1, 100]")] = None,
    cursor: Annotated[str | None, Query(description="Continuation token")] = None,
    sort_by: Annotated[TagSortKey | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder | None, Query(alias="sortOrder")] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    type: TagType | None = None,  # noqa: A002
) -> TagListOptions:
    """Parse listing query parameters into ``TagListOptions``."""
    return TagListOptions(
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        type=type,
    )


@router.get(
    "",
    response_model=CursorPage[TagRead],
    summary="List tags",
    description="Return tags one page at a time, by name unless told otherwise.",
)
async def list_tags(
    options: Annotated[TagListOptions, Depends(tag_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[TagRepository, Depends(get_tag_repository)],
) -> CursorPage[TagRead]:
    """List tags.

    Args:
        options: Parsed page request
        session: Database session
        repo: Tag repository

    Returns:
        One page of tags with the token for the next one
    """
    page = await repo.paginate(session, options)
    return CursorPage.from_result(page, TagRead.model_validate)


__all__ = ["router", "tag_list_options"]
