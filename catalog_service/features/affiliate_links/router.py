"""API router for the affiliate links feature.

Endpoints:
    GET /affiliate-links   - Cursor-paginated affiliate link listing
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.pagination import CursorPage, SortOrder  # noqa: TC001
from catalog_service.features.affiliate_links.repository import (
    AffiliateLinkRepository,
    get_affiliate_link_repository,
)
from catalog_service.features.affiliate_links.schemas import (
    AffiliateLinkListOptions,
    AffiliateLinkRead,
    AffiliateLinkSortKey,
)

router = APIRouter(prefix="/affiliate-links", tags=["affiliate-links"])


def affiliate_link_list_options(
    limit: Annotated[int | None, Query(description="Page size, clamped to [1, 100]")] = None,
    cursor: Annotated[str | None, Query(description="Continuation token")] = None,
    sort_by: Annotated[AffiliateLinkSortKey | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder | None, Query(alias="sortOrder")] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    tool_id: Annotated[str | None, Query(alias="toolId")] = None,
    is_primary: Annotated[bool | None, Query(alias="isPrimary")] = None,
) -> AffiliateLinkListOptions:
    """Parse listing query parameters into ``AffiliateLinkListOptions``."""
    return AffiliateLinkListOptions(
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        tool_id=tool_id,
        is_primary=is_primary,
    )


@router.get("", response_model=CursorPage[AffiliateLinkRead], summary="List affiliate links")
async def list_affiliate_links(
    options: Annotated[AffiliateLinkListOptions, Depends(affiliate_link_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[AffiliateLinkRepository, Depends(get_affiliate_link_repository)],
) -> CursorPage[AffiliateLinkRead]:
    page = await repo.paginate(session, options)
    return CursorPage.from_result(page, AffiliateLinkRead.model_validate)


__all__ = ["affiliate_link_list_options", "router"]
