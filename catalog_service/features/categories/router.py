"""API router for the categories feature.

Endpoints:
    GET /categories          - Cursor-paginated category listing
    GET /categories/{slug}   - Single category
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.exceptions import NotFoundException
from catalog_service.core.pagination import CursorPage, SortOrder  # noqa: TC001
from catalog_service.features.categories.repository import (
    CategoryRepository,
    get_category_repository,
)
from catalog_service.features.categories.schemas import (
    CategoryListOptions,
    CategoryRead,
    CategorySortKey,
)

router = APIRouter(prefix="/categories", tags=["categories"])


def category_list_options(
    limit: Annotated[int | None, Query(description="Page size, clamped to [1, 100]")] = None,
    cursor: Annotated[str | None, Query(description="Continuation token")] = None,
    sort_by: Annotated[CategorySortKey | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder | None, Query(alias="sortOrder")] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    parent_id: Annotated[str | None, Query(alias="parentId")] = None,
) -> CategoryListOptions:
    """Parse listing query parameters into ``CategoryListOptions``."""
    return CategoryListOptions(
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        parent_id=parent_id,
    )


@router.get("", response_model=CursorPage[CategoryRead], summary="List categories")
async def list_categories(
    options: Annotated[CategoryListOptions, Depends(category_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[CategoryRepository, Depends(get_category_repository)],
) -> CursorPage[CategoryRead]:
    """List categories, by weight then name unless told otherwise."""
    page = await repo.paginate(session, options)
    return CursorPage.from_result(page, CategoryRead.model_validate)


@router.get(
    "/{slug}",
    response_model=CategoryRead,
    summary="Get a category",
    responses={404: {"description": "Category not found"}},
)
async def get_category(
    slug: str,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[CategoryRepository, Depends(get_category_repository)],
) -> CategoryRead:
    category = await repo.get_by_slug(session, slug)
    if category is None:
        raise NotFoundException(f"Category {slug!r} not found", extra={"slug": slug})
    return CategoryRead.model_validate(category)


__all__ = ["category_list_options", "router"]
