"""SQLAlchemy models for the tools feature.

Tools are linked to categories, tags, stacks and alternative tools through
association tables. Sponsorships and affiliate links reference tools from
their own feature packages.
"""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base, StringUUIDPKMixin, TimestampMixin


class PricingModel(StrEnum):
    FREE = "Free"
    FREEMIUM = "Freemium"
    PAID = "Paid"
    OPEN_SOURCE = "Open Source"
    ENTERPRISE = "Enterprise"


class License(StrEnum):
    AGPL_3 = "agpl-3"
    MIT = "mit"
    APACHE_2 = "apache-2"
    GPL_3 = "gpl-3"
    MPL_2 = "mpl-2"
    BSD_3_CLAUSE = "bsd-3-clause"
    GPL_2 = "gpl-2"
    LGPL_2_1 = "lgpl-2-1"
    BSD_2_CLAUSE = "bsd-2-clause"
    EPL_2 = "epl-2"
    ISC = "isc"
    LGPL_3 = "lgpl-3"


def _association(name: str, left: str, right: str, right_table: str) -> Table:
    return Table(
        name,
        Base.metadata,
        Column(left, ForeignKey("tools.id", ondelete="CASCADE"), primary_key=True),
        Column(right, ForeignKey(f"{right_table}.id", ondelete="CASCADE"), primary_key=True),
        Index(f"ix_{name}_{right}", right),
    )


# Many-to-many association tables
tools_categories = _association("tools_categories", "tool_id", "category_id", "categories")
tools_tags = _association("tools_tags", "tool_id", "tag_id", "tags")
tools_stacks = _association("tools_stacks", "tool_id", "stack_id", "stacks")
# Self-referential: tool_id lists alternative_tool_id as an alternative
tools_alternatives = _association(
    "tools_alternatives", "tool_id", "alternative_tool_id", "tools"
)


class Tool(Base, StringUUIDPKMixin, TimestampMixin):
    """A product listed in the directory."""

    __tablename__ = "tools"
    __table_args__ = (
        Index("ix_tools_featured_created_at", "featured", "created_at"),
        Index("ix_tools_pricing_created_at", "pricing", "created_at"),
    )

    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(160), nullable=False, index=True)
    tagline: Mapped[str | None] = mapped_column(String(256), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo: Mapped[str] = mapped_column(String(256), nullable=False)
    website: Mapped[str | None] = mapped_column(String(256), nullable=True)
    pricing: Mapped[str] = mapped_column(
        String(32), nullable=False, comment="PricingModel value"
    )
    license: Mapped[str | None] = mapped_column(
        String(32), nullable=True, comment="License value"
    )
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Tool(id={self.id}, slug={self.slug!r})>"


__all__ = [
    "License",
    "PricingModel",
    "Tool",
    "tools_alternatives",
    "tools_categories",
    "tools_stacks",
    "tools_tags",
]
