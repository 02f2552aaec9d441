"""SQLAlchemy models for the affiliate links feature."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base, StringUUIDPKMixin, TimestampMixin


class ToolAffiliateLink(Base, StringUUIDPKMixin, TimestampMixin):
    """Revenue-bearing outbound link for a tool.

    Any affiliate link, primary or not, counts as affiliate presence for
    ranking.
    """

    __tablename__ = "tool_affiliate_links"

    tool_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    affiliate_url: Mapped[str] = mapped_column(String(512), nullable=False)
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 4), nullable=False, default=Decimal("0"), comment="0.20 = 20%"
    )
    tracking_code: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    click_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    revenue_tracked: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="Revenue in cents"
    )

    def __repr__(self) -> str:
        return f"<ToolAffiliateLink(id={self.id}, tool_id={self.tool_id})>"


__all__ = ["ToolAffiliateLink"]
