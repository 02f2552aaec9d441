"""Pydantic schemas for the stacks feature."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from catalog_service.core.pagination.schemas import PageOptions
from catalog_service.core.schemas import TimestampedBase

StackSortKey = Literal["name", "slug", "weight", "createdAt"]


class StackListOptions(PageOptions):
    sort_by: StackSortKey | None = Field(default=None, description="Sort key")
    parent_id: str | None = Field(default=None, description="Only children of this stack")


class StackRead(TimestampedBase):
    id: str
    slug: str
    name: str
    description: str | None = None
    icon: str | None = None
    parent_id: str | None = None
    weight: int = 0


__all__ = ["StackListOptions", "StackRead", "StackSortKey"]
