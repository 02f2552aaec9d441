"""Affiliate links feature: revenue-bearing outbound links for tools."""

from __future__ import annotations

from .models import ToolAffiliateLink
from .repository import AffiliateLinkRepository, get_affiliate_link_repository
from .schemas import AffiliateLinkListOptions, AffiliateLinkRead

__all__ = [
    "AffiliateLinkListOptions",
    "AffiliateLinkRead",
    "AffiliateLinkRepository",
    "ToolAffiliateLink",
    "get_affiliate_link_repository",
]
