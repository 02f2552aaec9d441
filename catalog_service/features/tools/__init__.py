"""Tools feature: ranked, searchable directory listings."""

from __future__ import annotations

from .models import License, PricingModel, Tool
from .ranking import ToolRankingPolicy
from .repository import ToolListing, ToolRepository, get_tool_repository
from .schemas import ToolDetail, ToolListItem, ToolListOptions, ToolRead

__all__ = [
    "License",
    "PricingModel",
    "Tool",
    "ToolDetail",
    "ToolListItem",
    "ToolListOptions",
    "ToolListing",
    "ToolRankingPolicy",
    "ToolRead",
    "ToolRepository",
    "get_tool_repository",
]
