"""SQLAlchemy models for the sponsorships feature."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base, StringUUIDPKMixin, TimestampMixin


class SponsorshipTier(StrEnum):
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class ToolSponsorship(Base, StringUUIDPKMixin, TimestampMixin):
    """Time-boxed paid placement for a tool.

    A sponsorship boosts its tool in listings while ``is_active`` is set
    and the current time lies in ``[start_date, end_date)``. Among active
    sponsorships, a higher ``priority_weight`` ranks first.
    """

    __tablename__ = "tool_sponsorships"
    __table_args__ = (
        Index("ix_tool_sponsorships_active_end_date", "is_active", "end_date"),
    )

    tool_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tier: Mapped[str] = mapped_column(String(20), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    priority_weight: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentStatus.PENDING.value
    )

    def __repr__(self) -> str:
        return f"<ToolSponsorship(id={self.id}, tool_id={self.tool_id}, tier={self.tier!r})>"


__all__ = ["PaymentStatus", "SponsorshipTier", "ToolSponsorship"]
