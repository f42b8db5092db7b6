"""
==============================================================================
Product Matcher Tests
==============================================================================

Tests for edit distance, similarity and fuzzy product matching.

==============================================================================
"""

import pytest

from dashboard.catalog.models import ProductRecord
from dashboard.search import matcher
from dashboard.search.matcher import ProductMatcher, edit_distance, match, similarity


CATALOG = [{"name": "Blue Widget"}, {"name": "Red Gadget"}, {"name": "Blue Gizmo"}]


class TestEditDistance:
    """Tests for the Levenshtein distance."""

    def test_kitten_sitting(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_identical(self):
        assert edit_distance("widget", "widget") == 0

    def test_against_empty(self):
        """Distance to the empty string is the other string's length."""
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3
        assert edit_distance("", "") == 0

    def test_symmetric(self):
        assert edit_distance("flaw", "lawn") == edit_distance("lawn", "flaw") == 2


class TestSimilarity:
    """Tests for the normalized similarity."""

    def test_identical_strings(self):
        assert similarity("kitten", "kitten") == 1.0

    def test_case_insensitive(self):
        assert similarity("Widget", "wIDGET") == 1.0

    def test_one_substitution(self):
        assert similarity("widget", "wedget") == pytest.approx(1 - 1 / 6)

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_nothing_in_common(self):
        assert similarity("widget", "zzzzzz") == 0.0


class TestMatch:
    """Tests for match()."""

    def test_empty_query_matches_nothing(self):
        assert match("", CATALOG) == []

    def test_blank_query_matches_nothing(self):
        assert match("   ", CATALOG) == []

    def test_empty_catalog(self):
        assert match("blue", []) == []

    def test_substring_keeps_catalog_order(self):
        result = match("blue", CATALOG)
        assert [p["name"] for p in result] == ["Blue Widget", "Blue Gizmo"]

    def test_substring_is_case_insensitive(self):
        result = match("RED", CATALOG)
        assert [p["name"] for p in result] == ["Red Gadget"]

    def test_substring_always_included(self):
        """A long name containing the query matches even when similarity is low."""
        catalog = [{"name": "Outdoor weatherproof double socket with cover"}]
        assert similarity(catalog[0]["name"], "cover") < 0.2
        assert match("cover", catalog) == catalog

    def test_typo_matches(self):
        assert match("wedget", [{"name": "Widget"}]) == [{"name": "Widget"}]

    def test_fuzzy_and_substring_keep_catalog_order(self):
        """Both kinds of match are interleaved in catalog order, not grouped."""
        catalog = [
            {"name": "Widget"},
            {"name": "Lamp"},
            {"name": "Blue Wedget Stand"},
            {"name": "Gadget"},
        ]
        assert "wedget" not in "widget"
        assert similarity("Lamp", "wedget") < 0.2

        result = match("wedget", catalog)

        assert [p["name"] for p in result] == ["Widget", "Blue Wedget Stand", "Gadget"]

    def test_unrelated_query(self):
        assert match("zzzzzz", [{"name": "Widget"}]) == []

    def test_missing_name_is_empty(self):
        """Candidates without a name compare as the empty string."""
        catalog = [{"price": 3}, {"name": None}, {"name": "Widget"}]
        assert match("widget", catalog) == [{"name": "Widget"}]

    def test_accepts_records(self):
        records = [ProductRecord(id="1", name="Blue Widget"), ProductRecord(id="2", name="Lamp")]
        assert [r.id for r in match("widgit", records)] == ["1"]

    def test_does_not_mutate_catalog(self):
        catalog = list(CATALOG)
        match("blue", catalog)
        assert catalog == CATALOG


class TestProductMatcher:
    """Tests for the configurable matcher."""

    def test_default_threshold(self):
        assert ProductMatcher().threshold == matcher.DEFAULT_SIMILARITY_THRESHOLD == 0.2

    def test_strict_threshold_drops_typos(self):
        strict = ProductMatcher(threshold=0.9)
        assert strict.match("wedget", [{"name": "Widget"}]) == []
        assert strict.match("widg", [{"name": "Widget"}]) == [{"name": "Widget"}]

    def test_zero_threshold_matches_everything(self):
        assert ProductMatcher(threshold=0.0).match("q", CATALOG) == CATALOG

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ValueError):
            ProductMatcher(threshold=threshold)
