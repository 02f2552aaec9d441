"""Page execution: one keyset query per page.

The executor combines filter predicates with the continuation predicate,
orders the rows, over-fetches by one to learn whether another page exists
and mints the next token from the last row it keeps.

Datastore errors propagate unchanged. Nothing is cached between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import and_, select, true

from catalog_service.core.pagination.types import PageResult
from catalog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import ColumnElement, Row, Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.core.pagination.cursor import CursorCodec
    from catalog_service.core.pagination.sorting import Sorter
    from catalog_service.core.pagination.types import (
        CursorState,
        QueryStrategy,
        SortConfig,
    )

# Fetch one extra row to detect has_more without a count query
PAGINATION_LOOKAHEAD = 1

_lazy = get_lazy_logger(__name__)


class RowSource[T](Protocol):
    """Where a page's rows come from and how they become items.

    ``select`` returns the base statement with the entity in the first
    column; any query-local augmentations (such as a relevance rank)
    follow it as labelled columns.
    """

    def select(self, strategy: QueryStrategy) -> Select[Any]: ...

    def to_item(self, row: Row[Any]) -> T: ...


class EntitySource[T]:
    """Row source selecting a single mapped entity.

    Args:
        model: Mapped class to select.
        join: Applied to the statement when the strategy asks for a join.
    """

    def __init__(
        self,
        model: type[T],
        *,
        join: Callable[[Select[Any]], Select[Any]] | None = None,
    ) -> None:
        self.model = model
        self._join = join

    def select(self, strategy: QueryStrategy) -> Select[Any]:
        stmt = select(self.model)
        if strategy.needs_join and self._join is not None:
            stmt = self._join(stmt)
        return stmt

    def to_item(self, row: Row[Any]) -> T:
        return row[0]


class PageExecutor:
    """Run one page query and format the result.

    Args:
        codec: Token codec used to mint ``next_cursor``.
    """

    def __init__(self, codec: CursorCodec) -> None:
        self.codec = codec

    async def execute[T](
        self,
        session: AsyncSession,
        source: RowSource[T],
        sorter: Sorter,
        filters: Sequence[ColumnElement[bool]],
        config: SortConfig,
        cursor: CursorState | None,
        limit: int,
        strategy: QueryStrategy,
    ) -> PageResult[T]:
        """Fetch the page following ``cursor``.

        Args:
            session: Database session
            source: Base statement and row-to-item conversion
            sorter: Ordering and continuation predicate
            filters: Predicates from the filter composer
            config: Resolved sort key and direction
            cursor: Decoded cursor, None for the first page
            limit: Clamped page size
            strategy: Join requirements for this request

        Returns:
            PageResult with at most ``limit`` items
        """
        conditions = list(filters)
        if cursor is not None:
            continuation = sorter.build_continuation(cursor, config)
            if continuation is not None:
                conditions.append(continuation)
        where = and_(*conditions) if conditions else true()

        stmt = (
            source.select(strategy)
            .where(where)
            .order_by(*sorter.build_order_by(config))
            .limit(limit + PAGINATION_LOOKAHEAD)
        )
        rows = list((await session.execute(stmt)).all())

        has_more = len(rows) > limit
        rows = rows[:limit]
        next_cursor = None
        if has_more and rows:
            next_cursor = self.codec.encode(sorter.extract_cursor(rows[-1], config), config.sort_by)

        _lazy.debug(
            lambda: f"db.page: sort={config.sort_by}/{config.sort_order} limit={limit} "
            f"cursor={'yes' if cursor else 'no'} -> {len(rows)} rows, has_more={has_more}"
        )
        return PageResult(
            items=[source.to_item(row) for row in rows],
            next_cursor=next_cursor,
            has_more=has_more,
        )


__all__ = ["PAGINATION_LOOKAHEAD", "EntitySource", "PageExecutor", "RowSource"]
