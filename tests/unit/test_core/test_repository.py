"""Tests for PaginatedRepository and PageExecutor against SQLite."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from catalog_service.core.database.exceptions import NotFoundError
from catalog_service.core.pagination import CursorState, PaginatedRepository
from catalog_service.features.tags.models import Tag, TagType
from catalog_service.features.tags.repository import TagRepository
from catalog_service.features.tags.schemas import TagListOptions
from tests.factories import at, make_tag


async def _persist(session, *rows):
    session.add_all(rows)
    await session.flush()


async def _walk(repo, session, options):
    """Follow next_cursor until the last page; return pages of ids."""
    pages = []
    while True:
        page = await repo.paginate(session, options)
        pages.append([tag.id for tag in page.items])
        if not page.has_more:
            assert page.next_cursor is None
            return pages
        options = options.model_copy(update={"cursor": page.next_cursor})


class TestLimit:
    """Page size handling."""

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(None, 20), (0, 1), (-3, 1), (1, 1), (50, 50), (100, 100), (101, 100), (10_000, 100)],
    )
    def test_clamp_limit(self, requested, expected):
        assert TagRepository().clamp_limit(requested) == expected

    async def test_limit_zero_still_returns_one_row(self, db_session):
        await _persist(db_session, make_tag("A", "alpha"), make_tag("B", "beta"))

        page = await TagRepository().paginate(db_session, TagListOptions(limit=0))

        assert [t.id for t in page.items] == ["A"]
        assert page.has_more


class TestHasMore:
    async def test_exactly_limit_rows_is_last_page(self, db_session):
        await _persist(db_session, *(make_tag(f"T{i}", f"tag {i}") for i in range(3)))

        page = await TagRepository().paginate(db_session, TagListOptions(limit=3))

        assert page.count == 3
        assert page.has_more is False
        assert page.next_cursor is None

    async def test_one_extra_row_sets_has_more(self, db_session):
        await _persist(db_session, *(make_tag(f"T{i}", f"tag {i}") for i in range(4)))

        page = await TagRepository().paginate(db_session, TagListOptions(limit=3))

        assert page.count == 3
        assert page.has_more is True
        assert page.next_cursor is not None

    async def test_empty_table(self, db_session):
        page = await TagRepository().paginate(db_session, TagListOptions())

        assert page.items == []
        assert page.has_more is False
        assert page.next_cursor is None


class TestTraversal:
    """Walking every page visits each row exactly once."""

    async def test_duplicate_names_break_ties_on_id(self, db_session):
        await _persist(
            db_session,
            make_tag("E", "same"),
            make_tag("B", "same"),
            make_tag("D", "same"),
            make_tag("A", "zeta"),
            make_tag("C", "alpha"),
        )

        pages = await _walk(TagRepository(), db_session, TagListOptions(limit=2, sort_by="name"))

        assert pages == [["C", "B"], ["D", "E"], ["A"]]

    async def test_descending_traversal(self, db_session):
        await _persist(
            db_session,
            *(make_tag(f"T{i}", f"tag {i}", created_at=at(i)) for i in range(7)),
        )

        pages = await _walk(
            TagRepository(),
            db_session,
            TagListOptions(limit=3, sort_by="createdAt", sort_order="desc"),
        )

        assert [tag_id for page in pages for tag_id in page] == [f"T{i}" for i in range(6, -1, -1)]
        assert [len(page) for page in pages] == [3, 3, 1]

    async def test_default_order_for_created_at_is_descending(self, db_session):
        await _persist(
            db_session,
            make_tag("OLD", "old", created_at=at(0)),
            make_tag("NEW", "new", created_at=at(10)),
        )

        page = await TagRepository().paginate(db_session, TagListOptions(sort_by="createdAt"))

        assert [t.id for t in page.items] == ["NEW", "OLD"]

    async def test_rows_inserted_before_the_cursor_are_not_repeated(self, db_session):
        repo = TagRepository()
        await _persist(db_session, *(make_tag(f"T{i}", f"tag {i}") for i in range(4)))
        first = await repo.paginate(db_session, TagListOptions(limit=2, sort_by="name"))

        await _persist(db_session, make_tag("X", "tag 0a"))
        second = await repo.paginate(
            db_session, TagListOptions(limit=2, sort_by="name", cursor=first.next_cursor)
        )

        assert [t.id for t in first.items] == ["T0", "T1"]
        assert [t.id for t in second.items] == ["T2", "T3"]

    async def test_cursor_row_deleted_between_pages(self, db_session):
        repo = TagRepository()
        await _persist(db_session, *(make_tag(f"T{i}", f"tag {i}") for i in range(4)))
        first = await repo.paginate(db_session, TagListOptions(limit=2, sort_by="name"))

        await db_session.delete(first.items[-1])
        await db_session.flush()
        second = await repo.paginate(
            db_session, TagListOptions(limit=2, sort_by="name", cursor=first.next_cursor)
        )

        assert [t.id for t in second.items] == ["T2", "T3"]

    async def test_filters_combine_with_the_cursor(self, db_session):
        await _persist(
            db_session,
            make_tag("A", "ci a", tag_type=TagType.DEPLOYMENT),
            make_tag("B", "ci b", tag_type=TagType.PLATFORM),
            make_tag("C", "ci c", tag_type=TagType.DEPLOYMENT),
            make_tag("D", "ci d", tag_type=TagType.DEPLOYMENT),
            make_tag("E", "other", tag_type=TagType.DEPLOYMENT),
        )

        pages = await _walk(
            TagRepository(),
            db_session,
            TagListOptions(limit=1, sort_by="name", search=" ci ", type=TagType.DEPLOYMENT),
        )

        assert pages == [["A"], ["C"], ["D"]]


class TestUnusableCursor:
    """Bad tokens restart from the first page."""

    async def test_tampered_cursor_serves_first_page_and_logs(self, db_session, caplog):
        repo = TagRepository()
        await _persist(db_session, *(make_tag(f"T{i}", f"tag {i}") for i in range(3)))
        first = await repo.paginate(db_session, TagListOptions(limit=2, sort_by="name"))
        forged = first.next_cursor[:-1] + ("0" if first.next_cursor[-1] != "0" else "1")

        with caplog.at_level(logging.DEBUG, logger="repository.Tag"):
            page = await repo.paginate(
                db_session, TagListOptions(limit=2, sort_by="name", cursor=forged)
            )

        assert [t.id for t in page.items] == ["T0", "T1"]
        rejected = [r for r in caplog.records if r.message.startswith("Continuation token")]
        assert len(rejected) == 1
        assert rejected[0].reason == "tampered"
        assert rejected[0].entity == "Tag"

    async def test_cursor_from_another_sort_is_ignored(self, db_session, caplog):
        repo = TagRepository()
        await _persist(
            db_session,
            *(make_tag(f"T{i}", f"tag {i}", created_at=at(i)) for i in range(3)),
        )
        by_name = await repo.paginate(db_session, TagListOptions(limit=1, sort_by="name"))

        with caplog.at_level(logging.DEBUG, logger="repository.Tag"):
            page = await repo.paginate(
                db_session,
                TagListOptions(limit=1, sort_by="createdAt", cursor=by_name.next_cursor),
            )

        assert [t.id for t in page.items] == ["T2"]
        assert any(getattr(r, "reason", None) == "sort_mismatch" for r in caplog.records)

    async def test_garbage_cursor(self, db_session):
        await _persist(db_session, make_tag("A", "alpha"))

        page = await TagRepository().paginate(db_session, TagListOptions(cursor="!!!"))

        assert [t.id for t in page.items] == ["A"]

    async def test_token_without_field_values_degrades_to_id_order(self, db_session):
        repo = TagRepository()
        await _persist(
            db_session,
            make_tag("A", "zeta"),
            make_tag("B", "alpha"),
            make_tag("C", "beta"),
        )
        token = repo.codec.encode(CursorState(id="A"), "name")

        page = await repo.paginate(db_session, TagListOptions(sort_by="name", cursor=token))

        assert [t.id for t in page.items] == ["B", "C"]


class TestPlan:
    async def test_repository_without_collaborators_must_override_plan(self, db_session):
        repo = PaginatedRepository(Tag, default_sort_by="name")

        with pytest.raises(NotImplementedError, match="override plan"):
            await repo.paginate(db_session, TagListOptions())


class TestBaseOperations:
    async def test_create_and_lookups(self, db_session):
        repo = TagRepository()

        await repo.create(db_session, make_tag("A", "alpha"))
        await repo.create_many(db_session, [make_tag("B", "beta"), make_tag("C", "gamma")])

        assert (await repo.get(db_session, "B")).name == "beta"
        assert (await repo.get_by(db_session, Tag.slug, "c-gamma")).id == "C"
        assert await repo.get_by(db_session, Tag.slug, "nope") is None

    async def test_get_or_raise(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await TagRepository().get_or_raise(db_session, "missing")

        assert exc_info.value.model_name == "Tag"
        assert exc_info.value.identifier == {"id": "missing"}


class TestDatastoreFailure:
    async def test_query_error_propagates(self, db_session):
        await db_session.execute(text("DROP TABLE tags"))

        with pytest.raises(OperationalError, match="no such table"):
            await TagRepository().paginate(db_session, TagListOptions())
