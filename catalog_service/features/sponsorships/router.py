"""API router for the sponsorships feature.

Endpoints:
    GET /sponsorships   - Cursor-paginated sponsorship listing
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from catalog_service.core.dependencies.database import get_db_session
from catalog_service.core.pagination import CursorPage, SortOrder  # noqa: TC001
from catalog_service.features.sponsorships.models import (  # noqa: TC001
    PaymentStatus,
    SponsorshipTier,
)
from catalog_service.features.sponsorships.repository import (
    SponsorshipRepository,
    get_sponsorship_repository,
)
from catalog_service.features.sponsorships.schemas import (
    SponsorshipListOptions,
    SponsorshipRead,
    SponsorshipSortKey,
)

router = APIRouter(prefix="/sponsorships", tags=["sponsorships"])


def sponsorship_list_options(
    limit: Annotated[int | None, Query(description="Page size, clamped to [1, 100]")] = None,
    cursor: Annotated[str | None, Query(description="Continuation token")] = None,
    sort_by: Annotated[SponsorshipSortKey | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortOrder | None, Query(alias="sortOrder")] = None,
    search: Annotated[str | None, Query(max_length=200, description="Tool name")] = None,
    tool_id: Annotated[str | None, Query(alias="toolId")] = None,
    tier: SponsorshipTier | None = None,
    payment_status: Annotated[PaymentStatus | None, Query(alias="paymentStatus")] = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
) -> SponsorshipListOptions:
    """Parse listing query parameters into ``SponsorshipListOptions``."""
    return SponsorshipListOptions(
        limit=limit,
        cursor=cursor,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        tool_id=tool_id,
        tier=tier,
        payment_status=payment_status,
        is_active=is_active,
    )


@router.get("", response_model=CursorPage[SponsorshipRead], summary="List sponsorships")
async def list_sponsorships(
    options: Annotated[SponsorshipListOptions, Depends(sponsorship_list_options)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    repo: Annotated[SponsorshipRepository, Depends(get_sponsorship_repository)],
) -> CursorPage[SponsorshipRead]:
    """List sponsorships, newest first unless told otherwise."""
    page = await repo.paginate(session, options)
    return CursorPage.from_result(page, SponsorshipRead.model_validate)


__all__ = ["router", "sponsorship_list_options"]
