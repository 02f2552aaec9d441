"""Repository for the tools feature.

Tool listings differ from the other catalogue listings in two ways:

- the order is decided by ``ToolRankingPolicy``, which needs the request
  time and search term, so the sorter is built per request
- the text search engine depends on the database dialect of the session
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, exists, select

from catalog_service.core.pagination import (
    FilterComposer,
    PagePlan,
    PaginatedRepository,
    is_defined,
)
from catalog_service.core.settings import get_pagination_settings
from catalog_service.features.affiliate_links.models import ToolAffiliateLink
from catalog_service.features.tools.models import (
    Tool,
    tools_alternatives,
    tools_categories,
    tools_stacks,
    tools_tags,
)
from catalog_service.features.tools.ranking import (
    DEFAULT_TOOL_SORT,
    RANK_LABEL,
    SPONSORED_LABEL,
    ToolRankingPolicy,
)
from catalog_service.features.tools.schemas import ToolListOptions
from catalog_service.features.tools.text_search import text_search_for

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import ColumnElement, Row, Select, Table
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.core.pagination import PageExecutor, PageResult, QueryStrategy, SortConfig
    from catalog_service.features.tools.text_search import TextSearch


@dataclass(slots=True, frozen=True)
class ToolListing:
    """A tool as it appears in a listing."""

    tool: Tool
    is_sponsored: bool


@dataclass(slots=True, frozen=True)
class ToolRelations:
    """Ids of everything a single tool links to."""

    category_ids: list[str]
    tag_ids: list[str]
    stack_ids: list[str]
    alternative_ids: list[str]
    affiliate_url: str | None


def _linked_to(table: Table, column: str, ids: Sequence[str]) -> ColumnElement[bool]:
    """EXISTS over an association table linking the tool to any of ``ids``."""
    return exists(
        select(table.c.tool_id).where(
            and_(table.c.tool_id == Tool.id, table.c[column].in_(list(ids)))
        )
    )


class ToolFilters(FilterComposer[ToolListOptions]):
    """Filters for the tool listing.

    Args:
        text_search: Engine used for the ``search`` option.
    """

    def __init__(self, text_search: TextSearch) -> None:
        self.text_search = text_search

    def build_search_filter(self, options: ToolListOptions) -> ColumnElement[bool] | None:
        term = options.search.strip() if options.search else ""
        if not term:
            return None
        return self.text_search.match(term)

    def build_entity_filters(self, options: ToolListOptions) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        if is_defined(options.featured):
            filters.append(Tool.featured.is_(options.featured))
        if options.pricing:
            filters.append(Tool.pricing.in_([str(p) for p in options.pricing]))
        if options.license:
            filters.append(Tool.license.in_([str(lic) for lic in options.license]))
        if options.category_ids:
            filters.append(_linked_to(tools_categories, "category_id", options.category_ids))
        if options.tag_ids:
            filters.append(_linked_to(tools_tags, "tag_id", options.tag_ids))
        if options.stack_ids:
            filters.append(_linked_to(tools_stacks, "stack_id", options.stack_ids))
        if options.alternative_ids:
            filters.append(
                _linked_to(tools_alternatives, "alternative_tool_id", options.alternative_ids)
            )
        return filters


class ToolRowSource:
    """Select tools with their sponsorship flag and, when ranking, the rank."""

    def __init__(self, policy: ToolRankingPolicy, *, include_rank: bool = False) -> None:
        self.policy = policy
        self.include_rank = include_rank

    def select(self, strategy: QueryStrategy) -> Select[Any]:
        columns: list[Any] = [self.policy.has_active_sponsorship(Tool.id).label(SPONSORED_LABEL)]
        rank = self.policy.rank()
        if self.include_rank and rank is not None:
            columns.append(rank.label(RANK_LABEL))
        return select(Tool, *columns)

    def to_item(self, row: Row[Any]) -> ToolListing:
        return ToolListing(tool=row[0], is_sponsored=bool(getattr(row, SPONSORED_LABEL)))


class ToolRepository(PaginatedRepository[Tool, ToolListOptions]):
    """Repository for the Tool model.

    Listing entry points:
        - paginate(session, options) -> PageResult[ToolListing]
        - get_by_category / get_by_tag / get_by_stack / get_by_alternative
        - search(session, query, options)

    Args:
        text_search: Fixed search engine; chosen from the session's
            dialect when omitted.
        clock: Returns the current aware UTC time.
        executor: Page executor; built with the process-wide codec if omitted.
    """

    def __init__(
        self,
        *,
        text_search: TextSearch | None = None,
        clock: Callable[[], datetime] | None = None,
        executor: PageExecutor | None = None,
    ) -> None:
        super().__init__(
            Tool,
            default_sort_by=DEFAULT_TOOL_SORT,
            default_limit=get_pagination_settings().tools_default_limit,
            default_order="desc",
            executor=executor,
        )
        self.text_search = text_search
        self._clock = clock or (lambda: datetime.now(UTC))

    def plan(
        self,
        session: AsyncSession,
        options: ToolListOptions,
        config: SortConfig,
    ) -> PagePlan:
        text_search = self.text_search or text_search_for(session.get_bind().dialect.name)
        policy = ToolRankingPolicy(
            now=self._clock(),
            search=options.search,
            text_search=text_search,
        )
        return PagePlan(
            source=ToolRowSource(policy, include_rank=policy.ranks_by_relevance(config)),
            sorter=policy,
            filters=ToolFilters(text_search).build_filters(options),
        )

    async def get_by_category(
        self,
        session: AsyncSession,
        category_id: str,
        options: ToolListOptions | None = None,
    ) -> PageResult[ToolListing]:
        """Page of tools in one category."""
        return await self._paginate_with(session, options, category_ids=[category_id])

    async def get_by_tag(
        self,
        session: AsyncSession,
        tag_id: str,
        options: ToolListOptions | None = None,
    ) -> PageResult[ToolListing]:
        """Page of tools carrying one tag."""
        return await self._paginate_with(session, options, tag_ids=[tag_id])

    async def get_by_stack(
        self,
        session: AsyncSession,
        stack_id: str,
        options: ToolListOptions | None = None,
    ) -> PageResult[ToolListing]:
        """Page of tools in one stack."""
        return await self._paginate_with(session, options, stack_ids=[stack_id])

    async def get_by_alternative(
        self,
        session: AsyncSession,
        tool_id: str,
        options: ToolListOptions | None = None,
    ) -> PageResult[ToolListing]:
        """Page of tools that list ``tool_id`` as an alternative."""
        return await self._paginate_with(session, options, alternative_ids=[tool_id])

    async def search(
        self,
        session: AsyncSession,
        query: str,
        options: ToolListOptions | None = None,
    ) -> PageResult[ToolListing]:
        """Page of tools matching ``query``, by relevance unless told otherwise."""
        options = options or ToolListOptions()
        return await self._paginate_with(
            session,
            options,
            search=query,
            sort_by=options.sort_by or "relevance",
        )

    async def get_by_slug(self, session: AsyncSession, slug: str) -> Tool | None:
        """Get a tool by its slug."""
        tool = await self.get_by(session, Tool.slug, slug)
        self._lazy.debug(lambda: f"db.get_by_slug({slug!r}) -> {tool is not None}")
        return tool

    async def get_relations(self, session: AsyncSession, tool_id: str) -> ToolRelations:
        """Collect the ids a tool links to and its primary affiliate URL.

        Args:
            session: Database session
            tool_id: Tool id

        Returns:
            ToolRelations; lists are empty when nothing is linked
        """

        async def ids(table: Table, column: str) -> list[str]:
            result = await session.execute(
                select(table.c[column]).where(table.c.tool_id == tool_id).order_by(table.c[column])
            )
            return [str(value) for value in result.scalars().all()]

        affiliate = await session.execute(
            select(ToolAffiliateLink.affiliate_url)
            .where(ToolAffiliateLink.tool_id == tool_id)
            .order_by(ToolAffiliateLink.is_primary.desc(), ToolAffiliateLink.created_at.asc())
            .limit(1)
        )
        relations = ToolRelations(
            category_ids=await ids(tools_categories, "category_id"),
            tag_ids=await ids(tools_tags, "tag_id"),
            stack_ids=await ids(tools_stacks, "stack_id"),
            alternative_ids=await ids(tools_alternatives, "alternative_tool_id"),
            affiliate_url=affiliate.scalar_one_or_none(),
        )
        self._lazy.debug(
            lambda: f"db.get_relations({tool_id}) -> {len(relations.category_ids)} categories, "
            f"{len(relations.tag_ids)} tags, {len(relations.stack_ids)} stacks"
        )
        return relations

    async def is_sponsored(self, session: AsyncSession, tool_id: str) -> bool:
        """Whether the tool has a sponsorship active right now."""
        policy = ToolRankingPolicy(now=self._clock())
        result = await session.execute(
            select(policy.has_active_sponsorship(Tool.id)).where(Tool.id == tool_id)
        )
        return bool(result.scalar_one_or_none())

    async def _paginate_with(
        self,
        session: AsyncSession,
        options: ToolListOptions | None,
        **overrides: Any,
    ) -> PageResult[ToolListing]:
        base = options or ToolListOptions()
        return await self.paginate(session, base.model_copy(update=overrides))


# Factory function for dependency injection
_tool_repository: ToolRepository | None = None


def get_tool_repository() -> ToolRepository:
    """Get ToolRepository instance.

    Usage in FastAPI routes:
        @router.get("/")
        async def list_tools(
            session: AsyncSession = Depends(get_db_session),
            repo: ToolRepository = Depends(get_tool_repository),
        ):
            return await repo.paginate(session, ToolListOptions())
    """
    global _tool_repository
    if _tool_repository is None:
        _tool_repository = ToolRepository()
    return _tool_repository


__all__ = [
    "ToolFilters",
    "ToolListing",
    "ToolRelations",
    "ToolRepository",
    "ToolRowSource",
    "get_tool_repository",
]
