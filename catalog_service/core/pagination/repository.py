"""Template repository for keyset-paginated list operations.

A paginated repository is composed from three collaborators rather than
inheriting them:

- a ``FilterComposer`` turning options into predicates
- a ``Sorter`` defining order, continuation and cursor extraction
- a ``PageExecutor`` running the query and minting the next token

``paginate`` is the single entry point. It clamps the limit, resolves
sort defaults, decodes the incoming token and delegates to the executor.

Example:
    class TagRepository(PaginatedRepository[Tag, TagListOptions]):
        def __init__(self) -> None:
            super().__init__(
                Tag,
                filters=TagFilters(),
                sorter=TAG_SORT,
                default_sort_by="name",
            )

    page = await TagRepository().paginate(session, TagListOptions(limit=10))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from catalog_service.core.database.repository import BaseRepository
from catalog_service.core.pagination.cursor import get_cursor_codec
from catalog_service.core.pagination.executor import EntitySource, PageExecutor
from catalog_service.core.pagination.types import QueryStrategy, SortConfig
from catalog_service.core.settings import get_pagination_settings

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.core.pagination.cursor import CursorCodec
    from catalog_service.core.pagination.executor import RowSource
    from catalog_service.core.pagination.filters import FilterComposer
    from catalog_service.core.pagination.schemas import PageOptions
    from catalog_service.core.pagination.sorting import Sorter
    from catalog_service.core.pagination.types import PageResult, SortOrder


@dataclass(slots=True, frozen=True)
class PagePlan:
    """Everything the executor needs for one request besides the cursor."""

    source: RowSource[Any]
    sorter: Sorter
    filters: list[ColumnElement[bool]]
    strategy: QueryStrategy = field(default_factory=QueryStrategy)


class PaginatedRepository[T, OptionsT: PageOptions](BaseRepository[T]):
    """Base class for repositories exposing a keyset-paginated listing.

    Subclasses override the hooks when the defaults do not fit:

    - ``resolve_sort_config``: sort key and direction for a request
    - ``determine_query_strategy``: whether filters require a join
    - ``plan``: row source, sorter and predicates for a request

    Args:
        model: Mapped entity class.
        filters: Filter composer for this entity's options.
        sorter: Sort strategy.
        default_sort_by: Sort key used when the request names none.
        default_limit: Page size when the request gives none; defaults to
            the configured ``default_limit``.
        default_order: Direction used when neither the request nor the
            sorter supplies one.
        executor: Page executor; built with the process-wide codec if omitted.
        source: Row source; selects the bare entity if omitted.

    ``filters`` and ``sorter`` may only be omitted by subclasses that build
    them per request in ``plan``.
    """

    def __init__(
        self,
        model: type[T],
        *,
        filters: FilterComposer[OptionsT] | None = None,
        sorter: Sorter | None = None,
        default_sort_by: str,
        default_limit: int | None = None,
        default_order: SortOrder = "desc",
        executor: PageExecutor | None = None,
        source: RowSource[T] | None = None,
    ) -> None:
        super().__init__(model)
        settings = get_pagination_settings()
        self.filters = filters
        self.sorter = sorter
        self.default_sort_by = default_sort_by
        self.default_order: SortOrder = default_order
        self.max_limit = settings.max_limit
        self.default_limit = min(default_limit or settings.default_limit, self.max_limit)
        self.executor = executor or PageExecutor(get_cursor_codec())
        self.source: RowSource[Any] = source or EntitySource(model)

    @property
    def codec(self) -> CursorCodec:
        return self.executor.codec

    async def paginate(self, session: AsyncSession, options: OptionsT) -> PageResult[Any]:
        """Fetch one page.

        An unusable token (missing, malformed, tampered, expired or issued
        for another sort key) is ignored and the first page is served.
        The reason is logged at DEBUG.

        Args:
            session: Database session
            options: Validated page request

        Returns:
            PageResult with items, next_cursor and has_more

        Raises:
            sqlalchemy.exc.SQLAlchemyError: The query failed.
        """
        limit = self.clamp_limit(options.limit)
        config = self.resolve_sort_config(options)
        validation = self.codec.validate(options.cursor, config.sort_by)
        if options.cursor and not validation.valid:
            self._logger.debug(
                "Continuation token rejected, serving first page",
                extra={
                    "entity": self.model.__name__,
                    "reason": str(validation.reason),
                    "sort_by": config.sort_by,
                },
            )

        plan = self.plan(session, options, config)
        return await self.executor.execute(
            session,
            plan.source,
            plan.sorter,
            plan.filters,
            config,
            validation.state,
            limit,
            plan.strategy,
        )

    def clamp_limit(self, limit: int | None) -> int:
        """Clamp a requested page size to ``[1, max_limit]``."""
        if limit is None:
            return self.default_limit
        return max(1, min(limit, self.max_limit))

    def resolve_sort_config(self, options: OptionsT) -> SortConfig:
        sort_by = options.sort_by or self.default_sort_by
        if options.sort_order is not None:
            return SortConfig(sort_by=sort_by, sort_order=options.sort_order)
        if self.sorter is not None:
            return SortConfig(sort_by=sort_by, sort_order=self.sorter.default_order(sort_by))
        return SortConfig(sort_by=sort_by, sort_order=self.default_order)

    def determine_query_strategy(self, options: OptionsT) -> QueryStrategy:
        return QueryStrategy()

    def plan(self, session: AsyncSession, options: OptionsT, config: SortConfig) -> PagePlan:
        """Assemble the row source, sorter and predicates for one request."""
        if self.filters is None or self.sorter is None:
            msg = f"{type(self).__name__} must pass filters and sorter or override plan()"
            raise NotImplementedError(msg)
        return PagePlan(
            source=self.source,
            sorter=self.sorter,
            filters=self.filters.build_filters(options),
            strategy=self.determine_query_strategy(options),
        )


__all__ = ["PagePlan", "PaginatedRepository"]
