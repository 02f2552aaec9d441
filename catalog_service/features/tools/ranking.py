"""Sponsorship-aware ordering for tool listings.

Tool listings are not a plain column sort: paid placement and affiliate
presence lift tools above the requested order. Each sort key expands to
a fixed sequence of ORDER BY terms:

    name       name, id
    newest     active sponsorship, affiliate link, created_at, id
    popular    active sponsorship, max priority, affiliate link,
               featured, created_at, id
    relevance  active sponsorship, max priority, affiliate link,
               rank DESC, id DESC

Boost terms always sort descending. ``relevance`` without a search term
orders exactly like ``newest``; tokens it issues still say ``relevance``.

Boosts are never stored in a token. When a page continues, the policy
recomputes the cursor row's boosts in SQL from its id, so a sponsorship
that starts or ends between two requests cannot make the seek condition
inconsistent with the ORDER BY.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import String, case, exists, func, literal, select

from catalog_service.core.pagination.filters import normalize_search
from catalog_service.core.pagination.sorting import (
    KeysetTerm,
    SortField,
    after,
    convert_cursor_value,
    directed,
    keyset_predicate,
)
from catalog_service.core.pagination.types import CursorState
from catalog_service.features.affiliate_links.models import ToolAffiliateLink
from catalog_service.features.sponsorships.models import ToolSponsorship
from catalog_service.features.tools.models import Tool
from catalog_service.features.tools.text_search import PortableTextSearch

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from sqlalchemy import ColumnElement, Row

    from catalog_service.core.pagination.types import SortConfig, SortOrder
    from catalog_service.features.tools.text_search import TextSearch

    Boost = Callable[[ColumnElement[Any]], ColumnElement[Any]]

TOOL_SORT_KEYS = ("name", "newest", "popular", "relevance")
DEFAULT_TOOL_SORT = "newest"

RANK_LABEL = "rank"
SPONSORED_LABEL = "is_sponsored"

NAME_FIELD = SortField(Tool.name, "name")
CREATED_AT_FIELD = SortField(Tool.created_at, "createdAt", "desc")
FEATURED_FIELD = SortField(Tool.featured, "featured", "desc")


@dataclass(slots=True, frozen=True)
class RankingPlan:
    """ORDER BY terms for one request, leading boosts first."""

    boosts: list[Boost]
    fields: list[tuple[SortField, SortOrder]] = field(default_factory=list)
    id_order: SortOrder = "desc"


class ToolRankingPolicy:
    """Sort strategy for tools, built once per request.

    Args:
        now: Instant used to decide which sponsorships are active.
        search: Raw search term; blank means no search.
        text_search: Engine computing the relevance rank.
    """

    def __init__(
        self,
        *,
        now: datetime,
        search: str | None = None,
        text_search: TextSearch | None = None,
    ) -> None:
        self.now = now
        self.search = normalize_search(search)
        self.text_search = text_search or PortableTextSearch()

    # ──────────────────────────────────────────────────────────────
    # Ranking inputs, computed per query for any tool id expression
    # ──────────────────────────────────────────────────────────────

    def _active_sponsorship_clause(self, tool_id: ColumnElement[Any]) -> list[ColumnElement[bool]]:
        return [
            ToolSponsorship.tool_id == tool_id,
            ToolSponsorship.is_active.is_(True),
            ToolSponsorship.start_date <= self.now,
            ToolSponsorship.end_date > self.now,
        ]

    def has_active_sponsorship(self, tool_id: ColumnElement[Any]) -> ColumnElement[Any]:
        """1 when the tool has a sponsorship active at ``now``, else 0."""
        active = exists(select(ToolSponsorship.id).where(*self._active_sponsorship_clause(tool_id)))
        return case((active, 1), else_=0)

    def max_sponsorship_priority(self, tool_id: ColumnElement[Any]) -> ColumnElement[Any]:
        """Highest priority weight among active sponsorships, 0 when none."""
        highest = (
            select(func.max(ToolSponsorship.priority_weight))
            .where(*self._active_sponsorship_clause(tool_id))
            .scalar_subquery()
        )
        return func.coalesce(highest, 0)

    def has_affiliate_link(self, tool_id: ColumnElement[Any]) -> ColumnElement[Any]:
        """1 when the tool has any affiliate link, else 0."""
        linked = exists(select(ToolAffiliateLink.id).where(ToolAffiliateLink.tool_id == tool_id))
        return case((linked, 1), else_=0)

    def rank(self) -> ColumnElement[Any] | None:
        """Relevance rank for the current search, None without one."""
        if self.search is None:
            return None
        return self.text_search.rank(self.search)

    def ranks_by_relevance(self, config: SortConfig) -> bool:
        return config.sort_by == "relevance" and self.search is not None

    # ──────────────────────────────────────────────────────────────
    # Sorter protocol
    # ──────────────────────────────────────────────────────────────

    def default_order(self, sort_by: str) -> SortOrder:
        return "desc"

    def build_order_by(self, config: SortConfig) -> list[ColumnElement[Any]]:
        plan = self.resolve(config)
        return [
            *(directed(boost(Tool.id), "desc") for boost in plan.boosts),
            *(directed(f.expression, order) for f, order in plan.fields),
            directed(Tool.id, plan.id_order),
        ]

    def build_continuation(
        self, cursor: CursorState, config: SortConfig
    ) -> ColumnElement[bool] | None:
        """Rows after the cursor row under the full ORDER BY.

        Falls back to an id-only comparison when the token lacks a value
        the order needs.
        """
        plan = self.resolve(config)
        if any(f.cursor_key not in cursor.fields for f, _ in plan.fields):
            return after(Tool.id, plan.id_order, cursor.id)

        anchor = literal(cursor.id, type_=String)
        terms = [KeysetTerm(boost(Tool.id), "desc", boost(anchor)) for boost in plan.boosts]
        terms.extend(
            KeysetTerm(
                f.expression,
                order,
                convert_cursor_value(f.expression, cursor.fields[f.cursor_key]),
            )
            for f, order in plan.fields
        )
        terms.append(KeysetTerm(Tool.id, plan.id_order, cursor.id))
        return keyset_predicate(terms)

    def extract_cursor(self, row: Row[Any], config: SortConfig) -> CursorState:
        tool = row[0]
        values: dict[str, Any] = {}
        for f, _ in self.resolve(config).fields:
            if f.cursor_key == RANK_LABEL:
                values[RANK_LABEL] = float(getattr(row, RANK_LABEL))
            else:
                values[f.cursor_key] = getattr(tool, f.attribute_name)
        return CursorState(
            id=str(tool.id),
            fields={key: value for key, value in values.items() if value is not None},
        )

    def resolve(self, config: SortConfig) -> RankingPlan:
        """Expand a sort key into boosts, stored fields and the id order."""
        order = config.sort_order
        match config.sort_by:
            case "name":
                return RankingPlan(boosts=[], fields=[(NAME_FIELD, order)], id_order=order)
            case "popular":
                return RankingPlan(
                    boosts=[
                        self.has_active_sponsorship,
                        self.max_sponsorship_priority,
                        self.has_affiliate_link,
                    ],
                    fields=[(FEATURED_FIELD, order), (CREATED_AT_FIELD, order)],
                    id_order=order,
                )
            case "relevance" if self.search is not None:
                rank = SortField(self.text_search.rank(self.search), RANK_LABEL)
                return RankingPlan(
                    boosts=[
                        self.has_active_sponsorship,
                        self.max_sponsorship_priority,
                        self.has_affiliate_link,
                    ],
                    fields=[(rank, "desc")],
                    id_order="desc",
                )
            case "newest" | "relevance":
                return self._newest(order)
            case _:
                return self._newest("desc")

    def _newest(self, order: SortOrder) -> RankingPlan:
        return RankingPlan(
            boosts=[self.has_active_sponsorship, self.has_affiliate_link],
            fields=[(CREATED_AT_FIELD, order)],
            id_order=order,
        )


__all__ = [
    "DEFAULT_TOOL_SORT",
    "RANK_LABEL",
    "SPONSORED_LABEL",
    "TOOL_SORT_KEYS",
    "RankingPlan",
    "ToolRankingPolicy",
]
