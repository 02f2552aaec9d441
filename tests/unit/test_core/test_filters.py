"""Tests for filter composition helpers."""

from __future__ import annotations

import pytest

from catalog_service.core.pagination import ilike_pattern, is_defined, normalize_search
from catalog_service.features.tags.models import TagType
from catalog_service.features.tags.repository import TagFilters
from catalog_service.features.tags.schemas import TagListOptions


class TestSearchHelpers:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_search_normalizes_to_none(self, value):
        assert normalize_search(value) is None
        assert ilike_pattern(value) is None

    def test_search_is_stripped(self):
        assert normalize_search("  docs  ") == "docs"
        assert ilike_pattern("  docs  ") == "%docs%"

    def test_false_is_defined(self):
        assert is_defined(False)
        assert is_defined(0)
        assert not is_defined(None)


class TestFilterComposer:
    """The tag composer exercises both hooks."""

    def test_no_options_no_filters(self):
        assert TagFilters().build_filters(TagListOptions()) == []

    def test_blank_search_adds_nothing(self):
        assert TagFilters().build_filters(TagListOptions(search="   ")) == []

    def test_search_and_type_both_apply(self):
        filters = TagFilters().build_filters(
            TagListOptions(search="ci", type=TagType.DEPLOYMENT)
        )

        assert len(filters) == 2
        rendered = [str(f.compile(compile_kwargs={"literal_binds": True})) for f in filters]
        assert "%ci%" in rendered[0]
        assert "deployment" in rendered[1]
