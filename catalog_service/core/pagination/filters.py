"""Filter composition for paginated list queries.

Each entity supplies one ``FilterComposer`` that turns its validated page
options into independent predicates. The executor ANDs them together with
the keyset continuation predicate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from catalog_service.core.pagination.schemas import PageOptions


def normalize_search(search: str | None) -> str | None:
    """Strip a search term, returning None when nothing is left."""
    if search is None:
        return None
    term = search.strip()
    return term or None


def ilike_pattern(search: str | None) -> str | None:
    """Build a ``%term%`` pattern for ILIKE, or None for a blank term."""
    term = normalize_search(search)
    return f"%{term}%" if term else None


def is_defined(value: Any) -> bool:
    """Presence check for optional filter values.

    Boolean options must go through this rather than truthiness so that an
    explicit ``False`` still produces a predicate.
    """
    return value is not None


class FilterComposer[OptionsT: PageOptions](ABC):
    """Turn page options into a list of SQL predicates.

    Subclasses implement two hooks:

    - ``build_search_filter``: free-text match, None when the search is blank
    - ``build_entity_filters``: equality and inclusion predicates

    Example:
        class TagFilters(FilterComposer[TagListOptions]):
            def build_search_filter(self, options):
                pattern = ilike_pattern(options.search)
                if pattern is None:
                    return None
                return or_(Tag.name.ilike(pattern), Tag.slug.ilike(pattern))

            def build_entity_filters(self, options):
                return [Tag.type == options.type] if is_defined(options.type) else []
    """

    def build_filters(self, options: OptionsT) -> list[ColumnElement[bool]]:
        """Concatenate the search predicate and the entity predicates."""
        filters: list[ColumnElement[bool]] = []
        search = self.build_search_filter(options)
        if search is not None:
            filters.append(search)
        filters.extend(self.build_entity_filters(options))
        return filters

    @abstractmethod
    def build_search_filter(self, options: OptionsT) -> ColumnElement[bool] | None:
        """Return the free-text predicate, or None for an empty search."""

    @abstractmethod
    def build_entity_filters(self, options: OptionsT) -> list[ColumnElement[bool]]:
        """Return predicates for the entity-specific option fields."""


__all__ = ["FilterComposer", "ilike_pattern", "is_defined", "normalize_search"]
