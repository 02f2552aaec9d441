"""Declarative base and composable model mixins.

Examples:
    class Category(Base, StringUUIDPKMixin, TimestampMixin):
        __tablename__ = "categories"
        name: Mapped[str] = mapped_column(String(255))
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with constraint naming and automatic table names.

    The automatic table name (lowercased class name) can be overridden by
    setting ``__tablename__`` explicitly on the model class.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


def _new_id() -> str:
    return str(uuid.uuid4())


class StringUUIDPKMixin:
    """Primary key stored as a 36-character UUID string.

    Identifiers are opaque strings end to end: they are compared as text in
    keyset predicates and travel verbatim inside continuation tokens, so the
    column type stays portable across PostgreSQL and SQLite.

    Provides:
        id: UUID v4 string primary key (explicit ids may be supplied)
    """

    __allow_unmapped__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=_new_id,
        comment="UUID string primary key",
    )


class TimestampMixin:
    """Automatic created_at and updated_at tracking.

    Uses both Python-side defaults (for test environments) and database
    server defaults (for direct SQL inserts).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


__all__ = ["NAMING_CONVENTION", "Base", "StringUUIDPKMixin", "TimestampMixin"]
