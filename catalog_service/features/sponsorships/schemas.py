"""Pydantic schemas for the sponsorships feature."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from catalog_service.core.pagination.schemas import PageOptions
from catalog_service.core.schemas import TimestampedBase
from catalog_service.features.sponsorships.models import PaymentStatus, SponsorshipTier

SponsorshipSortKey = Literal["startDate", "endDate", "priorityWeight", "createdAt"]


class SponsorshipListOptions(PageOptions):
    """Page request for the sponsorship listing.

    ``search`` matches the sponsored tool's name.
    """

    sort_by: SponsorshipSortKey | None = Field(default=None, description="Sort key")
    tool_id: str | None = Field(default=None, description="Only this tool's sponsorships")
    tier: SponsorshipTier | None = None
    payment_status: PaymentStatus | None = None
    is_active: bool | None = Field(default=None, description="Filter on the active flag")


class SponsorshipRead(TimestampedBase):
    """Sponsorship representation returned from the API."""

    id: str
    tool_id: str
    tier: SponsorshipTier
    start_date: datetime
    end_date: datetime
    is_active: bool
    priority_weight: int
    payment_status: PaymentStatus


__all__ = ["SponsorshipListOptions", "SponsorshipRead", "SponsorshipSortKey"]
