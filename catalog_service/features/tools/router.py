"""API router for the tools feature.

Endpoints:
    GET /tools                      - Ranked, filtered, cursor-paginated listing
    GET /tools/search               - Full-text search, by relevance by default
    GET /tools/{slug}               - Single tool with its relations
    GET /tools/{slug}/alternatives  - Tools listing this tool as an alternative

Listing responses use cursor pagination:

    {"items": [...], "nextCursor": "eyJpZCI6...", "hasMore": true}

Pass ``nextCursor`` back as ``cursor`` with the same ``sortBy`` to fetch the
following page. An expired or otherwise unusable cursor restarts from the
first page.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.exceptions import NotFoundException
from catalog_service.core.pagination import CursorPage, SortOrder  # noqa: TC001
from catalog_service.features.tools.models import License, PricingModel  # noqa: TC001
from catalog_service.features.tools.repository import (
    ToolListing,
    ToolRepository,
    get_tool_repository,
)
from catalog_service.features.tools.schemas import (
    ToolDetail,
    ToolListItem,
    ToolListOptions,
    ToolRead,
    ToolSortKey,
)

router = APIRouter(prefix="/tools", tags=["tools"])
logger = logging.getLogger(__name__)


def tool_list_options(
    limit: Annotated[int | None, Query(description="Page size, clamped to [1, 100]")] = None,
    cursor: Annotated[str | None, Query(description="Continuation token")] = None,
    sort_by: Annotated[ToolSortKey | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder | None, Query(alias="sortOrder")] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    featured: bool | None = None,
    pricing: Annotated[list[PricingModel] | None, Query()] = None,
    license: Annotated[list[License] | None, Query()] = None,  # noqa: A002
    category_ids: Annotated[list[str] | None, Query(alias="categoryIds")] = None,
    tag_ids: Annotated[list[str] | None, Query(alias="tagIds")] = None,
    stack_ids: Annotated[list[str] | None, Query(alias="stackIds")] = None,
    alternative_ids: Annotated[list[str] | None, Query(alias="alternativeIds")] = None,
) -> ToolListOptions:
    """Parse listing query parameters into ``ToolListOptions``."""
    return ToolListOptions(
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        featured=featured,
        pricing=pricing,
        license=license,
        category_ids=category_ids,
        tag_ids=tag_ids,
        stack_ids=stack_ids,
        alternative_ids=alternative_ids,
    )


def _to_list_item(listing: ToolListing) -> ToolListItem:
    return ToolListItem(
        **ToolRead.model_validate(listing.tool).model_dump(),
        is_sponsored=listing.is_sponsored,
    )


@router.get(
    "",
    response_model=CursorPage[ToolListItem],
    summary="List tools",
    description="Ranked tool listing. Sponsored and affiliate tools lead every order except name.",
)
async def list_tools(
    options: Annotated[ToolListOptions, Depends(tool_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[ToolRepository, Depends(get_tool_repository)],
) -> CursorPage[ToolListItem]:
    """List tools one page at a time."""
    page = await repo.paginate(session, options)
    return CursorPage.from_result(page, _to_list_item)


@router.get(
    "/search",
    response_model=CursorPage[ToolListItem],
    summary="Search tools",
)
async def search_tools(
    q: Annotated[str, Query(min_length=1, max_length=200, description="Search query")],
    options: Annotated[ToolListOptions, Depends(tool_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[ToolRepository, Depends(get_tool_repository)],
) -> CursorPage[ToolListItem]:
    """Search tools by name, tagline and description."""
    page = await repo.search(session, q, options)
    return CursorPage.from_result(page, _to_list_item)


@router.get(
    "/{slug}",
    response_model=ToolDetail,
    summary="Get a tool",
    responses={404: {"description": "Tool not found"}},
)
async def get_tool(
    slug: str,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[ToolRepository, Depends(get_tool_repository)],
) -> ToolDetail:
    """Get a single tool by slug, with related ids and its affiliate link."""
    tool = await repo.get_by_slug(session, slug)
    if tool is None:
        raise NotFoundException(f"Tool {slug!r} not found", extra={"slug": slug})

    relations = await repo.get_relations(session, tool.id)
    return ToolDetail(
        **ToolRead.model_validate(tool).model_dump(),
        is_sponsored=await repo.is_sponsored(session, tool.id),
        category_ids=relations.category_ids,
        tag_ids=relations.tag_ids,
        stack_ids=relations.stack_ids,
        alternative_ids=relations.alternative_ids,
        affiliate_url=relations.affiliate_url,
    )


@router.get(
    "/{slug}/alternatives",
    response_model=CursorPage[ToolListItem],
    summary="List tools offered as alternatives to a tool",
    responses={404: {"description": "Tool not found"}},
)
async def list_alternatives(
    slug: str,
    options: Annotated[ToolListOptions, Depends(tool_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[ToolRepository, Depends(get_tool_repository)],
) -> CursorPage[ToolListItem]:
    """Page of tools that name ``slug`` as an alternative."""
    tool = await repo.get_by_slug(session, slug)
    if tool is None:
        raise NotFoundException(f"Tool {slug!r} not found", extra={"slug": slug})

    page = await repo.get_by_alternative(session, tool.id, options)
    return CursorPage.from_result(page, _to_list_item)


__all__ = ["router", "tool_list_options"]
