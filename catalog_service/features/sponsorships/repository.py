"""Repository for the sponsorships feature.

Searching matches the sponsored tool's name, so a search request selects
through a join on ``tools``. Requests without a search never join.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from catalog_service.core.pagination import (
    EntitySource,
    FilterComposer,
    KeysetSortStrategy,
    PaginatedRepository,
    QueryStrategy,
    SortField,
    ilike_pattern,
    is_defined,
    normalize_search,
)
from catalog_service.features.sponsorships.models import ToolSponsorship
from catalog_service.features.sponsorships.schemas import SponsorshipListOptions
from catalog_service.features.tools.models import Tool

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

SPONSORSHIP_SORT = KeysetSortStrategy(
    id_column=ToolSponsorship.id,
    fields={
        "startDate": SortField(ToolSponsorship.start_date, "startDate", "desc"),
        "endDate": SortField(ToolSponsorship.end_date, "endDate", "desc"),
        "priorityWeight": SortField(ToolSponsorship.priority_weight, "priorityWeight", "desc"),
        "createdAt": SortField(ToolSponsorship.created_at, "createdAt", "desc"),
    },
    fallback=[SortField(ToolSponsorship.created_at, "createdAt", "desc")],
    fallback_id_order="desc",
)


def join_tools(stmt: Select[Any]) -> Select[Any]:
    return stmt.join(Tool, Tool.id == ToolSponsorship.tool_id)


class SponsorshipFilters(FilterComposer[SponsorshipListOptions]):
    """Tool-name search plus tool, tier, payment and active filters."""

    def build_search_filter(self, options: SponsorshipListOptions) -> ColumnElement[bool] | None:
        pattern = ilike_pattern(options.search)
        return Tool.name.ilike(pattern) if pattern else None

    def build_entity_filters(self, options: SponsorshipListOptions) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        if options.tool_id:
            filters.append(ToolSponsorship.tool_id == options.tool_id)
        if options.tier:
            filters.append(ToolSponsorship.tier == str(options.tier))
        if options.payment_status:
            filters.append(ToolSponsorship.payment_status == str(options.payment_status))
        if is_defined(options.is_active):
            filters.append(ToolSponsorship.is_active.is_(options.is_active))
        return filters


class SponsorshipRepository(PaginatedRepository[ToolSponsorship, SponsorshipListOptions]):
    """Repository for the ToolSponsorship model."""

    def __init__(self) -> None:
        super().__init__(
            ToolSponsorship,
            filters=SponsorshipFilters(),
            sorter=SPONSORSHIP_SORT,
            default_sort_by="createdAt",
            source=EntitySource(ToolSponsorship, join=join_tools),
        )

    def determine_query_strategy(self, options: SponsorshipListOptions) -> QueryStrategy:
        return QueryStrategy(needs_join=normalize_search(options.search) is not None)


# Factory function for dependency injection
_sponsorship_repository: SponsorshipRepository | None = None


def get_sponsorship_repository() -> SponsorshipRepository:
    """Get SponsorshipRepository instance."""
    global _sponsorship_repository
    if _sponsorship_repository is None:
        _sponsorship_repository = SponsorshipRepository()
    return _sponsorship_repository


__all__ = [
    "SPONSORSHIP_SORT",
    "SponsorshipFilters",
    "SponsorshipRepository",
    "get_sponsorship_repository",
    "join_tools",
]
