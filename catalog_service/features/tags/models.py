"""SQLAlchemy models for the tags feature."""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base, StringUUIDPKMixin, TimestampMixin


class TagType(StrEnum):
    PRICING = "pricing"
    PLATFORM = "platform"
    COMPLIANCE = "compliance"
    DEPLOYMENT = "deployment"
    STAGE = "stage"
    FEATURE = "feature"


class BadgeVariant(StrEnum):
    DEFAULT = "default"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    GOLD = "gold"
    SECONDARY = "secondary"
    OUTLINE = "outline"


class Tag(Base, StringUUIDPKMixin, TimestampMixin):
    """Secondary classification for tools, grouped by ``type``."""

    __tablename__ = "tags"

    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    color: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BadgeVariant.DEFAULT.value
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r})>"


__all__ = ["BadgeVariant", "Tag", "TagType"]
