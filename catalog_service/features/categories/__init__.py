"""Categories feature: primary groupings for tools."""

from __future__ import annotations

from .models import Category
from .repository import CategoryRepository, get_category_repository
from .schemas import CategoryListOptions, CategoryRead

__all__ = [
    "Category",
    "CategoryListOptions",
    "CategoryRead",
    "CategoryRepository",
    "get_category_repository",
]
