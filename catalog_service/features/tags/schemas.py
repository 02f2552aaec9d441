"""Pydantic schemas for the tags feature."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from catalog_service.core.pagination.schemas import PageOptions
from catalog_service.core.schemas import TimestampedBase
from catalog_service.features.tags.models import BadgeVariant, TagType

TagSortKey = Literal["name", "createdAt"]


class TagListOptions(PageOptions):
    """Page request for the tag listing."""

    sort_by: TagSortKey | None = Field(default=None, description="Sort key")
    type: TagType | None = Field(default=None, description="Only tags of this type")


class TagRead(TimestampedBase):
    """Tag representation returned from the API."""

    id: str
    slug: str
    name: str
    type: TagType
    color: BadgeVariant = BadgeVariant.DEFAULT


__all__ = ["TagListOptions", "TagRead", "TagSortKey"]
