"""Tests for keyset sort strategies and the seek predicate."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.dialects import sqlite

from catalog_service.core.pagination import (
    CursorState,
    KeysetSortStrategy,
    KeysetTerm,
    SortConfig,
    SortField,
    keyset_predicate,
)
from catalog_service.core.pagination.sorting import convert_cursor_value
from catalog_service.features.affiliate_links.models import ToolAffiliateLink
from catalog_service.features.categories.models import Category
from catalog_service.features.categories.repository import CATEGORY_SORT
from catalog_service.features.tools.models import Tool


def _sql(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


class TestKeysetPredicate:
    """Lexicographic "strictly after" construction."""

    def test_single_term(self):
        clause = keyset_predicate([KeysetTerm(Category.id, "asc", "B")])

        assert _sql(clause) == "categories.id > 'B'"

    def test_mixed_directions(self):
        clause = keyset_predicate(
            [
                KeysetTerm(Category.weight, "desc", 5),
                KeysetTerm(Category.name, "asc", "Docs"),
                KeysetTerm(Category.id, "asc", "B"),
            ]
        )

        sql = _sql(clause)
        assert "categories.weight < 5" in sql
        assert "categories.weight = 5 AND categories.name > 'Docs'" in sql
        assert (
            "categories.weight = 5 AND categories.name = 'Docs' AND categories.id > 'B'" in sql
        )
        assert sql.count(" OR ") == 2

    @pytest.mark.parametrize(("order", "operator"), [("desc", "<"), ("asc", ">")])
    def test_boolean_cursor_value_is_bound(self, order, operator):
        clause = keyset_predicate(
            [
                KeysetTerm(Tool.featured, order, True),
                KeysetTerm(Tool.id, order, "B"),
            ]
        )

        sql = str(clause.compile(dialect=sqlite.dialect()))
        assert sql == (
            f"tools.featured {operator} ? OR tools.featured = ? AND tools.id {operator} ?"
        )


class TestKeysetSortStrategy:
    def test_known_key_orders_by_field_then_id(self):
        order = CATEGORY_SORT.build_order_by(SortConfig("name", "desc"))

        assert [_sql(term) for term in order] == ["categories.name DESC", "categories.id DESC"]

    def test_unknown_key_uses_fixed_fallback(self):
        order = CATEGORY_SORT.build_order_by(SortConfig("popularity", "desc"))

        assert [_sql(term) for term in order] == [
            "categories.weight ASC",
            "categories.name ASC",
            "categories.id ASC",
        ]

    def test_default_order_comes_from_field(self):
        assert CATEGORY_SORT.default_order("createdAt") == "desc"
        assert CATEGORY_SORT.default_order("name") == "asc"
        assert CATEGORY_SORT.default_order("unknown") == "asc"

    def test_continuation_without_field_value_is_id_only(self):
        clause = CATEGORY_SORT.build_continuation(
            CursorState(id="B", fields={}), SortConfig("name", "asc")
        )

        assert _sql(clause) == "categories.id > 'B'"

    def test_continuation_with_field_value_is_keyset(self):
        clause = CATEGORY_SORT.build_continuation(
            CursorState(id="B", fields={"weight": 2}), SortConfig("weight", "desc")
        )

        assert _sql(clause) == (
            "categories.weight < 2 OR categories.weight = 2 AND categories.id < 'B'"
        )

    def test_extract_cursor_reads_entity_and_skips_nulls(self):
        entity = SimpleNamespace(id="C", name="Docs", weight=None)
        row = (entity,)

        by_name = CATEGORY_SORT.extract_cursor(row, SortConfig("name", "asc"))
        by_weight = CATEGORY_SORT.extract_cursor(row, SortConfig("weight", "asc"))

        assert by_name == CursorState(id="C", fields={"name": "Docs"})
        assert by_weight == CursorState(id="C", fields={})

    def test_attribute_override(self):
        strategy = KeysetSortStrategy(
            id_column=Category.id,
            fields={"newest": SortField(Category.created_at, "createdAt", "desc")},
            fallback=[],
        )
        created = datetime(2026, 1, 1, tzinfo=UTC)
        row = (SimpleNamespace(id="A", created_at=created),)

        state = strategy.extract_cursor(row, SortConfig("newest", "desc"))

        assert state.fields == {"createdAt": created}


class TestConvertCursorValue:
    def test_numeric_column_gets_decimal(self):
        value = convert_cursor_value(ToolAffiliateLink.commission_rate, "0.1250")

        assert value == Decimal("0.1250")
        assert isinstance(value, Decimal)

    def test_datetime_string_is_parsed(self):
        value = convert_cursor_value(Category.created_at, "2026-01-01T00:00:01.000Z")

        assert value == datetime(2026, 1, 1, 0, 0, 1, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["Docs", 3, True])
    def test_other_values_pass_through(self, value):
        assert convert_cursor_value(Category.name, value) == value
