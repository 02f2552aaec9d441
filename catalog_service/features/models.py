"""Import every feature model so ``Base.metadata`` knows all tables.

Used by the test fixtures and by anything calling ``create_all``.
"""

from __future__ import annotations

from catalog_service.features.affiliate_links.models import ToolAffiliateLink
from catalog_service.features.categories.models import Category
from catalog_service.features.sponsorships.models import ToolSponsorship
from catalog_service.features.stacks.models import Stack
from catalog_service.features.tags.models import Tag
from catalog_service.features.tools.models import (
    Tool,
    tools_alternatives,
    tools_categories,
    tools_stacks,
    tools_tags,
)

__all__ = [
    "Category",
    "Stack",
    "Tag",
    "Tool",
    "ToolAffiliateLink",
    "ToolSponsorship",
    "tools_alternatives",
    "tools_categories",
    "tools_stacks",
    "tools_tags",
]
