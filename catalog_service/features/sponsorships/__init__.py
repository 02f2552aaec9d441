"""Sponsorships feature: paid, time-boxed placement for tools."""

from __future__ import annotations

from .models import PaymentStatus, SponsorshipTier, ToolSponsorship
from .repository import SponsorshipRepository, get_sponsorship_repository
from .schemas import SponsorshipListOptions, SponsorshipRead

__all__ = [
    "PaymentStatus",
    "SponsorshipListOptions",
    "SponsorshipRead",
    "SponsorshipRepository",
    "SponsorshipTier",
    "ToolSponsorship",
    "get_sponsorship_repository",
]
