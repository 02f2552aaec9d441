"""Pydantic schemas for the categories feature."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from catalog_service.core.pagination.schemas import PageOptions
from catalog_service.core.schemas import TimestampedBase

CategorySortKey = Literal["name", "slug", "weight", "createdAt"]


class CategoryListOptions(PageOptions):
    """Page request for the category listing."""

    sort_by: CategorySortKey | None = Field(default=None, description="Sort key")
    parent_id: str | None = Field(default=None, description="Only children of this category")


class CategoryRead(TimestampedBase):
    """Category representation returned from the API."""

    id: str
    slug: str
    name: str
    description: str | None = None
    icon: str
    parent_id: str | None = None
    weight: int = 0


__all__ = ["CategoryListOptions", "CategoryRead", "CategorySortKey"]
