"""Pydantic schemas for the tools feature."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from catalog_service.core.pagination.schemas import PageOptions
from catalog_service.core.schemas import TimestampedBase
from catalog_service.features.tools.models import License, PricingModel

ToolSortKey = Literal["name", "newest", "popular", "relevance"]


class ToolListOptions(PageOptions):
    """Page request for the tool listing.

    List filters match any of the given values; id filters match tools
    linked to any of the given ids.
    """

    sort_by: ToolSortKey | None = Field(default=None, description="Sort key")
    featured: bool | None = Field(default=None, description="Only featured, or only not featured")
    pricing: list[PricingModel] | None = Field(default=None, description="Pricing models")
    license: list[License] | None = Field(default=None, description="Licenses")
    category_ids: list[str] | None = Field(default=None, description="Category ids")
    tag_ids: list[str] | None = Field(default=None, description="Tag ids")
    stack_ids: list[str] | None = Field(default=None, description="Stack ids")
    alternative_ids: list[str] | None = Field(
        default=None,
        description="Tools listing any of these ids as an alternative",
    )


class ToolRead(TimestampedBase):
    """Tool representation returned from the API."""

    id: str
    slug: str
    name: str
    tagline: str | None = None
    description: str
    logo: str
    website: str | None = None
    pricing: PricingModel
    license: License | None = None
    featured: bool = False


class ToolListItem(ToolRead):
    """Tool in a listing, flagged when a sponsorship lifts it."""

    is_sponsored: bool = Field(default=False, description="Has an active sponsorship")


class ToolDetail(ToolListItem):
    """Single tool with its relations and primary affiliate link."""

    category_ids: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    stack_ids: list[str] = Field(default_factory=list)
    alternative_ids: list[str] = Field(default_factory=list)
    affiliate_url: str | None = Field(default=None, description="Primary affiliate link")


__all__ = [
    "ToolDetail",
    "ToolListItem",
    "ToolListOptions",
    "ToolRead",
    "ToolSortKey",
]
