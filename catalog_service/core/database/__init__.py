"""Database primitives: declarative base, mixins, repository and errors."""

from catalog_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    StringUUIDPKMixin,
    TimestampMixin,
)
from catalog_service.core.database.exceptions import NotFoundError, RepositoryError
from catalog_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "NotFoundError",
    "RepositoryError",
    "StringUUIDPKMixin",
    "TimestampMixin",
]
