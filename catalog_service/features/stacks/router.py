"""API router for the stacks feature.

Endpoints:
    GET /stacks          - Cursor-paginated stack listing
    GET /stacks/{slug}   - Single stack
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.exceptions import NotFoundException
from catalog_service.core.pagination import CursorPage, SortOrder  # noqa: TC001
from catalog_service.features.stacks.repository import StackRepository, get_stack_repository
from catalog_service.features.stacks.schemas import StackListOptions, StackRead, StackSortKey

router = APIRouter(prefix="/stacks", tags=["stacks"])


def stack_list_options(
    limit: Annotated[int | None, Query(description="Page size, clamped to [1, 100]")] = None,
    cursor: Annotated[str | None, Query(description="Continuation token")] = None,
    sort_by: Annotated[StackSortKey | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder | None, Query(alias="sortOrder")] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    parent_id: Annotated[str | None, Query(alias="parentId")] = None,
) -> StackListOptions:
    """Parse listing query parameters into ``StackListOptions``."""
    return StackListOptions(
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        parent_id=parent_id,
    )


@router.get("", response_model=CursorPage[StackRead], summary="List stacks")
async def list_stacks(
    options: Annotated[StackListOptions, Depends(stack_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[StackRepository, Depends(get_stack_repository)],
) -> CursorPage[StackRead]:
    page = await repo.paginate(session, options)
    return CursorPage.from_result(page, StackRead.model_validate)


@router.get(
    "/{slug}",
    response_model=StackRead,
    summary="Get a stack",
    responses={404: {"description": "Stack not found"}},
)
async def get_stack(
    slug: str,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[StackRepository, Depends(get_stack_repository)],
) -> StackRead:
    stack = await repo.get_by_slug(session, slug)
    if stack is None:
        raise NotFoundException(f"Stack {slug!r} not found", extra={"slug": slug})
    return StackRead.model_validate(stack)


__all__ = ["router", "stack_list_options"]
