"""Tests for building and refreshing the candidate vocabulary."""

import pytest

from sqlnote.domains.query.completion import (
    CandidateSet,
    InvalidArgumentError,
    build_candidate_set,
    candidate_sort_key,
    refresh_schema,
)


class TestBuildCandidateSet:
    """Tests for build_candidate_set."""

    def test_views_are_computed(self):
        cs = build_candidate_set(["SELECT", "FROM"], ["orders", "order_items"])
        assert cs.all_completions == {"SELECT", "FROM", "orders", "order_items"}
        assert cs.schema_completions == {"orders", "order_items"}
        assert cs.keywords == {"SELECT", "FROM"}

    def test_schema_completions_subset_of_all(self):
        cs = build_candidate_set(["SELECT"], ["orders", "SELECT"])
        assert cs.schema_completions <= cs.all_completions

    def test_duplicates_collapse(self):
        """A name that is both keyword and schema object appears once."""
        cs = build_candidate_set(["USER", "USER"], ["USER", "orders"])
        assert cs.sorted_all.count("USER") == 1
        assert len(cs) == 2

    def test_case_variants_are_distinct(self):
        cs = build_candidate_set(["ORDER"], ["order", "Order"])
        assert {"ORDER", "order", "Order"} <= cs.all_completions
        assert len(cs) == 3

    def test_empty_inputs(self):
        cs = build_candidate_set([], [])
        assert len(cs) == 0
        assert cs.sorted_all == ()
        assert cs == CandidateSet.empty()

    def test_accepts_any_iterable(self):
        cs = build_candidate_set((k for k in ["SELECT"]), {"orders"})
        assert "SELECT" in cs
        assert "orders" in cs

    def test_sorted_all_is_ordered(self):
        cs = build_candidate_set(["SELECT", "FROM", "WHERE"], ["orders", "order_items"])
        assert list(cs.sorted_all) == sorted(cs.all_completions, key=candidate_sort_key)
        assert cs.sorted_all[0] == "FROM"

    def test_set_is_immutable(self):
        cs = build_candidate_set(["SELECT"], ["orders"])
        with pytest.raises(AttributeError):
            cs.keywords = frozenset()

    @pytest.mark.parametrize(
        "keywords,schema_names",
        [
            (None, []),
            ([], None),
            ("SELECT", []),
            ([], "orders"),
            ([1], []),
            ([], [None]),
            ([""], []),
            ([], ["orders", ""]),
            (42, []),
        ],
    )
    def test_invalid_input_rejected(self, keywords, schema_names):
        with pytest.raises(InvalidArgumentError):
            build_candidate_set(keywords, schema_names)


class TestRefreshSchema:
    """Tests for replacing the schema partition."""

    def test_keywords_kept_schema_replaced(self):
        current = build_candidate_set(["SELECT", "FROM"], ["orders"])
        refreshed = refresh_schema(current, ["customers"])
        assert refreshed.keywords == current.keywords
        assert refreshed.schema_completions == {"customers"}
        assert "orders" not in refreshed
        assert "customers" in refreshed

    def test_current_set_unchanged(self):
        current = build_candidate_set(["SELECT"], ["orders"])
        refresh_schema(current, ["customers"])
        assert current.schema_completions == {"orders"}

    def test_refresh_to_empty_schema(self):
        current = build_candidate_set(["SELECT"], ["orders"])
        refreshed = refresh_schema(current, [])
        assert refreshed.all_completions == {"SELECT"}

    def test_none_current_rejected(self):
        with pytest.raises(InvalidArgumentError):
            refresh_schema(None, ["orders"])

    def test_invalid_names_rejected(self):
        current = build_candidate_set(["SELECT"], ["orders"])
        with pytest.raises(InvalidArgumentError):
            refresh_schema(current, None)


class TestSortKey:
    """Tests for completion ordering."""

    def test_case_insensitive_primary_order(self):
        names = ["orders", "FROM", "order_items", "ORDER"]
        assert sorted(names, key=candidate_sort_key) == ["FROM", "ORDER", "order_items", "orders"]

    def test_case_variants_ordered_by_bytes(self):
        """Upper case sorts before lower case among equal casefolds."""
        assert sorted(["order", "ORDER", "Order"], key=candidate_sort_key) == ["ORDER", "Order", "order"]
