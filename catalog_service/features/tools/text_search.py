"""Full-text matching and ranking for tool search.

Two engines share one interface so the ranking policy does not care which
database it runs against:

- ``PostgresFullText``: ``to_tsvector``/``plainto_tsquery`` match with an
  ILIKE fallback, ranked by ``ts_rank``
- ``PortableTextSearch``: ILIKE match ranked by which fields matched
  (name 3, tagline 2, description 1)

The rank is always projected as double precision so that the value read
back into a token compares equal to the expression on the next page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import Double, case, cast, func, literal, or_

from catalog_service.core.pagination.filters import ilike_pattern
from catalog_service.features.tools.models import Tool

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

TS_CONFIG = "english"

# Portable score per matched field
NAME_WEIGHT = 3
TAGLINE_WEIGHT = 2
DESCRIPTION_WEIGHT = 1


class TextSearch(Protocol):
    """Match and rank tools against a non-blank search term."""

    def match(self, term: str) -> ColumnElement[bool]: ...

    def rank(self, term: str) -> ColumnElement[Any]: ...


def _ilike_any(term: str) -> ColumnElement[bool]:
    pattern = ilike_pattern(term)
    return or_(
        Tool.name.ilike(pattern),
        Tool.tagline.ilike(pattern),
        Tool.description.ilike(pattern),
    )


class PostgresFullText:
    """PostgreSQL text search over name, tagline and description."""

    def __init__(self, config: str = TS_CONFIG) -> None:
        self.config = config

    def document(self) -> ColumnElement[Any]:
        text = (
            Tool.name
            + literal(" ")
            + func.coalesce(Tool.tagline, "")
            + literal(" ")
            + Tool.description
        )
        return func.to_tsvector(self.config, text)

    def query(self, term: str) -> ColumnElement[Any]:
        return func.plainto_tsquery(self.config, term)

    def match(self, term: str) -> ColumnElement[bool]:
        return or_(self.document().op("@@")(self.query(term)), _ilike_any(term))

    def rank(self, term: str) -> ColumnElement[Any]:
        return cast(func.ts_rank(self.document(), self.query(term)), Double)


class PortableTextSearch:
    """Case-insensitive substring search for databases without ``tsvector``."""

    def match(self, term: str) -> ColumnElement[bool]:
        return _ilike_any(term)

    def rank(self, term: str) -> ColumnElement[Any]:
        pattern = ilike_pattern(term)
        score = (
            case((Tool.name.ilike(pattern), NAME_WEIGHT), else_=0)
            + case((Tool.tagline.ilike(pattern), TAGLINE_WEIGHT), else_=0)
            + case((Tool.description.ilike(pattern), DESCRIPTION_WEIGHT), else_=0)
        )
        return cast(score, Double)


def text_search_for(dialect_name: str) -> TextSearch:
    """Pick the engine for a SQLAlchemy dialect name."""
    if dialect_name == "postgresql":
        return PostgresFullText()
    return PortableTextSearch()


__all__ = [
    "PortableTextSearch",
    "PostgresFullText",
    "TextSearch",
    "text_search_for",
]
