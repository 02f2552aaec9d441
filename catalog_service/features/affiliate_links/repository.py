"""Repository for the affiliate links feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import or_

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
from catalog_service.features.affiliate_links.models import ToolAffiliateLink
from catalog_service.features.affiliate_links.schemas import AffiliateLinkListOptions
from catalog_service.features.tools.models import Tool

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

AFFILIATE_LINK_SORT = KeysetSortStrategy(
    id_column=ToolAffiliateLink.id,
    fields={
        "createdAt": SortField(ToolAffiliateLink.created_at, "createdAt", "desc"),
        "clickCount": SortField(ToolAffiliateLink.click_count, "clickCount", "desc"),
        "revenueTracked": SortField(ToolAffiliateLink.revenue_tracked, "revenueTracked", "desc"),
        # Numeric: the token carries the rate as a decimal string
        "commissionRate": SortField(ToolAffiliateLink.commission_rate, "commissionRate", "desc"),
    },
    fallback=[SortField(ToolAffiliateLink.created_at, "createdAt", "desc")],
    fallback_id_order="desc",
)


def join_tools(stmt: Select[Any]) -> Select[Any]:
    return stmt.join(Tool, Tool.id == ToolAffiliateLink.tool_id)


class AffiliateLinkFilters(FilterComposer[AffiliateLinkListOptions]):
    """Search on tool name or tracking code; tool and primary filters."""

    def build_search_filter(self, options: AffiliateLinkListOptions) -> ColumnElement[bool] | None:
        pattern = ilike_pattern(options.search)
        if pattern is None:
            return None
        return or_(Tool.name.ilike(pattern), ToolAffiliateLink.tracking_code.ilike(pattern))

    def build_entity_filters(self, options: AffiliateLinkListOptions) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        if options.tool_id:
            filters.append(ToolAffiliateLink.tool_id == options.tool_id)
        if is_defined(options.is_primary):
            filters.append(ToolAffiliateLink.is_primary.is_(options.is_primary))
        return filters


class AffiliateLinkRepository(PaginatedRepository[ToolAffiliateLink, AffiliateLinkListOptions]):
    """Repository for the ToolAffiliateLink model.

    Search requests join ``tools`` to match on the tool name.
    """

    def __init__(self) -> None:
        super().__init__(
            ToolAffiliateLink,
            filters=AffiliateLinkFilters(),
            sorter=AFFILIATE_LINK_SORT,
            default_sort_by="createdAt",
            source=EntitySource(ToolAffiliateLink, join=join_tools),
        )

    def determine_query_strategy(self, options: AffiliateLinkListOptions) -> QueryStrategy:
        return QueryStrategy(needs_join=normalize_search(options.search) is not None)


# Factory function for dependency injection
_affiliate_link_repository: AffiliateLinkRepository | None = None


def get_affiliate_link_repository() -> AffiliateLinkRepository:
    """Get AffiliateLinkRepository instance."""
    global _affiliate_link_repository
    if _affiliate_link_repository is None:
        _affiliate_link_repository = AffiliateLinkRepository()
    return _affiliate_link_repository


__all__ = [
    "AFFILIATE_LINK_SORT",
    "AffiliateLinkFilters",
    "AffiliateLinkRepository",
    "get_affiliate_link_repository",
    "join_tools",
]
