"""Shared value types for keyset pagination.

These are plain frozen dataclasses passed between the codec, the sort
strategies, the executor and the repositories. None of them are persisted:
a page request builds them, a page response discards them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

CursorScalar = datetime | bool | int | float | Decimal | str
SortOrder = Literal["asc", "desc"]


@dataclass(slots=True, frozen=True)
class CursorState:
    """Position of the last row of the previous page.

    Attributes:
        id: Unique identifier of that row.
        fields: Sort-relevant values keyed by the sort field's cursor key
            (e.g. ``{"createdAt": datetime(...)}`` or ``{"rank": 0.42}``).
            Absent keys make the continuation degrade to an id-only
            comparison.
    """

    id: str
    fields: Mapping[str, CursorScalar] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class SortConfig:
    """Resolved sort key and direction for one page request."""

    sort_by: str
    sort_order: SortOrder


@dataclass(slots=True, frozen=True)
class QueryStrategy:
    """Per-request execution hints.

    Attributes:
        needs_join: The filters reference a joined table, so the row
            source must select through the join.
    """

    needs_join: bool = False


@dataclass(slots=True, frozen=True)
class PageResult[T]:
    """One page of results.

    Attributes:
        items: Rows on this page, at most ``limit`` of them.
        next_cursor: Token for the following page, None on the last page.
        has_more: Whether the datastore returned more rows than the limit.

    Example:
        page = await repo.paginate(session, options)
        while page.has_more:
            options = options.model_copy(update={"cursor": page.next_cursor})
            page = await repo.paginate(session, options)
    """

    items: Sequence[T]
    next_cursor: str | None
    has_more: bool

    @property
    def count(self) -> int:
        """Number of items on this page."""
        return len(self.items)


class CursorRejection(StrEnum):
    """Why a continuation token was not accepted."""

    MISSING = "missing"
    INVALID_FORMAT = "invalid_format"
    TAMPERED = "tampered"
    EXPIRED = "expired"
    SORT_MISMATCH = "sort_mismatch"


@dataclass(slots=True, frozen=True)
class CursorValidation:
    """Outcome of validating a continuation token.

    Exactly one of ``state`` and ``reason`` is set.
    """

    state: CursorState | None = None
    reason: CursorRejection | None = None

    @property
    def valid(self) -> bool:
        return self.state is not None


__all__ = [
    "CursorRejection",
    "CursorScalar",
    "CursorState",
    "CursorValidation",
    "PageResult",
    "QueryStrategy",
    "SortConfig",
    "SortOrder",
]
