"""Tests for the category, stack, sponsorship and affiliate link listings."""

from __future__ import annotations

from datetime import timedelta

from catalog_service.features.affiliate_links.repository import AffiliateLinkRepository
from catalog_service.features.affiliate_links.schemas import AffiliateLinkListOptions
from catalog_service.features.categories.repository import CategoryRepository
from catalog_service.features.categories.schemas import CategoryListOptions
from catalog_service.features.sponsorships.models import SponsorshipTier
from catalog_service.features.sponsorships.repository import SponsorshipRepository
from catalog_service.features.sponsorships.schemas import SponsorshipListOptions
from catalog_service.features.stacks.models import Stack
from catalog_service.features.stacks.repository import StackRepository
from catalog_service.features.stacks.schemas import StackListOptions
from tests.factories import (
    BASE_TIME,
    at,
    make_affiliate_link,
    make_category,
    make_sponsorship,
    make_tool,
)


async def _persist(session, *rows):
    session.add_all(rows)
    await session.flush()


async def _walk(repo, session, options) -> list[list[str]]:
    pages = []
    while True:
        page = await repo.paginate(session, options)
        pages.append([item.id for item in page.items])
        if not page.has_more:
            return pages
        options = options.model_copy(update={"cursor": page.next_cursor})


class TestCategories:
    async def test_default_is_weight_then_name(self, db_session):
        await _persist(
            db_session,
            make_category("A", "Zeta", weight=1),
            make_category("B", "Alpha", weight=2),
            make_category("C", "Beta", weight=1),
        )

        page = await CategoryRepository().paginate(db_session, CategoryListOptions())

        assert [c.id for c in page.items] == ["C", "A", "B"]

    async def test_weight_pagination_with_ties(self, db_session):
        await _persist(
            db_session,
            *(make_category(f"C{i}", f"cat {i}", weight=i % 2) for i in range(5)),
        )

        pages = await _walk(
            CategoryRepository(), db_session, CategoryListOptions(sort_by="weight", limit=2)
        )

        assert pages == [["C0", "C2"], ["C4", "C1"], ["C3"]]

    async def test_search_and_parent(self, db_session):
        await _persist(
            db_session,
            make_category("ROOT", "Developer Tools"),
            make_category("CHILD", "Testing", parent_id="ROOT", description="Test runners"),
            make_category("OTHER", "Design", parent_id="ROOT"),
        )
        repo = CategoryRepository()

        searched = await repo.paginate(db_session, CategoryListOptions(search="runner"))
        children = await repo.paginate(db_session, CategoryListOptions(parent_id="ROOT"))

        assert [c.id for c in searched.items] == ["CHILD"]
        assert sorted(c.id for c in children.items) == ["CHILD", "OTHER"]

    async def test_get_by_slug(self, db_session):
        await _persist(db_session, make_category("A", "Databases"))

        category = await CategoryRepository().get_by_slug(db_session, "a-databases")

        assert category.name == "Databases"


class TestStacks:
    async def test_created_at_descending_by_default(self, db_session):
        await _persist(
            db_session,
            Stack(id="OLD", slug="old", name="Old", created_at=at(0), updated_at=at(0)),
            Stack(id="NEW", slug="new", name="New", created_at=at(1), updated_at=at(1)),
        )

        page = await StackRepository().paginate(
            db_session, StackListOptions(sort_by="createdAt")
        )

        assert [s.id for s in page.items] == ["NEW", "OLD"]


class TestSponsorships:
    async def test_search_joins_tool_names(self, db_session):
        window = {"start": BASE_TIME, "end": BASE_TIME + timedelta(days=30)}
        await _persist(
            db_session,
            make_tool("T1", "Acme Docs"),
            make_tool("T2", "Other"),
            make_sponsorship("T1", sponsorship_id="S1", created_at=at(0), **window),
            make_sponsorship("T2", sponsorship_id="S2", created_at=at(1), **window),
            make_sponsorship("T1", sponsorship_id="S3", created_at=at(2), **window),
        )
        repo = SponsorshipRepository()

        searched = await _walk(repo, db_session, SponsorshipListOptions(search="acme", limit=1))
        everything = await repo.paginate(db_session, SponsorshipListOptions())

        assert searched == [["S3"], ["S1"]]
        assert [s.id for s in everything.items] == ["S3", "S2", "S1"]

    def test_search_requests_a_join(self):
        repo = SponsorshipRepository()

        assert repo.determine_query_strategy(SponsorshipListOptions(search="x")).needs_join
        assert not repo.determine_query_strategy(SponsorshipListOptions(search=" ")).needs_join

    async def test_priority_and_filters(self, db_session):
        window = {"start": BASE_TIME, "end": BASE_TIME + timedelta(days=30)}
        await _persist(
            db_session,
            make_tool("T1"),
            make_sponsorship("T1", sponsorship_id="LOW", priority=1, **window),
            make_sponsorship(
                "T1", sponsorship_id="HIGH", priority=9, tier=SponsorshipTier.PREMIUM, **window
            ),
            make_sponsorship("T1", sponsorship_id="OFF", priority=5, is_active=False, **window),
        )
        repo = SponsorshipRepository()

        by_priority = await repo.paginate(
            db_session, SponsorshipListOptions(sort_by="priorityWeight")
        )
        active = await repo.paginate(
            db_session, SponsorshipListOptions(sort_by="priorityWeight", is_active=True)
        )
        premium = await repo.paginate(
            db_session, SponsorshipListOptions(tier=SponsorshipTier.PREMIUM)
        )

        assert [s.id for s in by_priority.items] == ["HIGH", "OFF", "LOW"]
        assert [s.id for s in active.items] == ["HIGH", "LOW"]
        assert [s.id for s in premium.items] == ["HIGH"]


class TestAffiliateLinks:
    async def test_commission_rate_pages_through_decimal_ties(self, db_session):
        await _persist(
            db_session,
            make_tool("T1"),
            make_affiliate_link("T1", link_id="L1", commission_rate="0.1000"),
            make_affiliate_link("T1", link_id="L2", commission_rate="0.2000"),
            make_affiliate_link("T1", link_id="L3", commission_rate="0.2000"),
            make_affiliate_link("T1", link_id="L4", commission_rate="0.3000"),
        )

        pages = await _walk(
            AffiliateLinkRepository(),
            db_session,
            AffiliateLinkListOptions(sort_by="commissionRate", limit=2),
        )

        assert pages == [["L4", "L3"], ["L2", "L1"]]

    async def test_search_matches_tool_name_or_tracking_code(self, db_session):
        await _persist(
            db_session,
            make_tool("T1", "Acme"),
            make_tool("T2", "Other"),
            make_affiliate_link("T1", link_id="BY_NAME", created_at=at(0)),
            make_affiliate_link("T2", link_id="BY_CODE", tracking_code="acme-q3", created_at=at(1)),
            make_affiliate_link("T2", link_id="MISS", created_at=at(2)),
        )

        page = await AffiliateLinkRepository().paginate(
            db_session, AffiliateLinkListOptions(search="ACME")
        )

        assert [link.id for link in page.items] == ["BY_CODE", "BY_NAME"]

    async def test_click_count_and_primary_filter(self, db_session):
        await _persist(
            db_session,
            make_tool("T1"),
            make_affiliate_link("T1", link_id="FEW", click_count=3),
            make_affiliate_link("T1", link_id="MANY", click_count=30, is_primary=True),
        )
        repo = AffiliateLinkRepository()

        by_clicks = await repo.paginate(
            db_session, AffiliateLinkListOptions(sort_by="clickCount", sort_order="asc")
        )
        primary = await repo.paginate(db_session, AffiliateLinkListOptions(is_primary=True))

        assert [link.id for link in by_clicks.items] == ["FEW", "MANY"]
        assert [link.id for link in primary.items] == ["MANY"]
