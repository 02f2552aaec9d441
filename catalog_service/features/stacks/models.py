"""SQLAlchemy models for the stacks feature."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base, StringUUIDPKMixin, TimestampMixin


class Stack(Base, StringUUIDPKMixin, TimestampMixin):
    """Technology stack grouping (e.g. "JAMstack")."""

    __tablename__ = "stacks"
    __table_args__ = (Index("ix_stacks_weight_name", "weight", "name"),)

    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("stacks.id", ondelete="SET NULL"), nullable=True
    )
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Stack(id={self.id}, slug={self.slug!r})>"


__all__ = ["Stack"]
