"""
Unit tests for issuelens.core.paths module.

Tests ancestor chain expansion for issue locators.
"""

import pytest

from issuelens.core.paths import ROOT, count_tokens, expand_path, index_path, member_path


class TestExpandPath:
    """Tests for expand_path function."""

    def test_root_only(self):
        assert expand_path("$") == ("$",)

    def test_member_and_index_tokens(self):
        assert expand_path("$.items[0].body.format") == (
            "$",
            "$.items",
            "$.items[0]",
            "$.items[0].body",
            "$.items[0].body.format",
        )

    def test_consecutive_indexes(self):
        assert expand_path("$[0][12]") == ("$", "$[0]", "$[0][12]")

    def test_ends_with_path_itself(self):
        path = "$.a.b[3].c"
        chain = expand_path(path)
        assert chain[0] == ROOT
        assert chain[-1] == path

    @pytest.mark.parametrize("path", ["", "not-a-path", "items[0]", ".a", " $.a"])
    def test_malformed_paths_expand_to_nothing(self, path):
        assert expand_path(path) == ()

    def test_unrecognized_trailing_characters_append_full_path(self):
        chain = expand_path("$.a[x]")
        assert chain[:2] == ("$", "$.a")
        assert chain[-1] == "$.a[x]"

    def test_trailing_dot_appends_full_path(self):
        assert expand_path("$.a.") == ("$", "$.a", "$.a.")

    def test_no_duplicate_entries_for_clean_paths(self):
        chain = expand_path("$.a.b.c")
        assert len(chain) == len(set(chain))

    def test_is_deterministic(self):
        assert expand_path("$.x[1].y") == expand_path("$.x[1].y")


class TestCountTokens:
    """Tests for count_tokens function."""

    def test_counts_member_and_index_tokens(self):
        assert count_tokens("$.items[0].body") == 3

    def test_root_has_no_tokens(self):
        assert count_tokens("$") == 0

    def test_malformed_has_no_tokens(self):
        assert count_tokens("items.body") == 0

    def test_chain_length_is_tokens_plus_root(self):
        path = "$.a[0].b[1][2].c"
        assert len(expand_path(path)) == count_tokens(path) + 1


class TestPathBuilders:
    """Tests for member_path and index_path."""

    def test_member_path(self):
        assert member_path("$", "items") == "$.items"

    def test_index_path(self):
        assert index_path("$.items", 4) == "$.items[4]"

    def test_builders_round_trip_through_expand(self):
        path = member_path(index_path(member_path(ROOT, "items"), 0), "id")
        assert expand_path(path) == ("$", "$.items", "$.items[0]", "$.items[0].id")
