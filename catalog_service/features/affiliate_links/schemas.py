"""Pydantic schemas for the affiliate links feature."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import Field

from catalog_service.core.pagination.schemas import PageOptions
from catalog_service.core.schemas import TimestampedBase

AffiliateLinkSortKey = Literal["createdAt", "clickCount", "revenueTracked", "commissionRate"]


class AffiliateLinkListOptions(PageOptions):
    """Page request for the affiliate link listing.

    ``search`` matches the tool's name or the link's tracking code.
    """

    sort_by: AffiliateLinkSortKey | None = Field(default=None, description="Sort key")
    tool_id: str | None = Field(default=None, description="Only this tool's links")
    is_primary: bool | None = Field(default=None, description="Filter on the primary flag")


class AffiliateLinkRead(TimestampedBase):
    """Affiliate link representation returned from the API."""

    id: str
    tool_id: str
    affiliate_url: str
    commission_rate: Decimal = Field(..., description="Fraction, 0.20 = 20%")
    tracking_code: str | None = None
    is_primary: bool
    click_count: int
    revenue_tracked: int = Field(..., description="Revenue in cents")


__all__ = ["AffiliateLinkListOptions", "AffiliateLinkRead", "AffiliateLinkSortKey"]
