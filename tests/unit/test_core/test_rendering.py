"""
Unit tests for issuelens.core.rendering module.

Tests the plain-text outline of annotated trees.
"""

import pytest

from issuelens.core.annotate import annotate
from issuelens.core.index import build_index
from issuelens.core.rendering import (
    COLLAPSED_LABEL,
    TRUNCATED_LABEL,
    RenderOptions,
    RenderResult,
    format_pill,
    format_primitive,
    render_tree,
)


@pytest.fixture
def end_to_end_tree(end_to_end_document, end_to_end_issues):
    return annotate(end_to_end_document, build_index(end_to_end_issues))


class TestFormatPrimitive:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("x", '"x"'),
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (1.5, "1.5"),
        ],
    )
    def test_json_rendering(self, value, expected):
        assert format_primitive(value) == expected


class TestFormatPill:
    def test_no_issues_no_pill(self):
        assert format_pill(annotate(1)) == ""

    def test_count_without_own_issues(self, end_to_end_tree):
        assert format_pill(end_to_end_tree) == "  [2]"

    def test_count_with_dominant_severity(self, end_to_end_tree):
        assert format_pill(end_to_end_tree.find("$.items[0]")) == "  [2 error]"


class TestRenderTree:
    """Tests for render_tree function."""

    def test_end_to_end_outline(self, end_to_end_tree):
        result = render_tree(end_to_end_tree)

        assert isinstance(result, RenderResult)
        assert result.text.splitlines() == [
            "{  1 properties  [2]",
            '  "items": [  1 items  [2]',
            "    {  1 properties  [2 error]",
            "      -> error E1: m2",
            '      "id": "x"  [1 warning]',
            "        -> warning W1: m1",
            "    }",
            "  ]",
            "}",
        ]
        assert result.node_count == 4
        assert result.annotated_count == 2

    def test_hide_issues(self, end_to_end_tree):
        text = render_tree(end_to_end_tree, RenderOptions(show_issues=False)).text
        assert "->" not in text

    def test_indent_width(self, end_to_end_tree):
        lines = render_tree(end_to_end_tree, RenderOptions(indent=4)).text.splitlines()
        assert lines[1].startswith('    "items"')

    def test_collapse_below_max_depth(self, end_to_end_tree):
        lines = render_tree(end_to_end_tree, RenderOptions(max_depth=1)).text.splitlines()
        assert lines == [
            "{  1 properties  [2]",
            '  "items": [  1 items  [2]',
            f"    {COLLAPSED_LABEL}",
            "  ]",
            "}",
        ]

    def test_truncated_node(self):
        tree = annotate({"a": [1]}, max_depth=1)
        text = render_tree(tree).text
        assert f'"a": {TRUNCATED_LABEL}' in text
        assert "-> warning depth-exceeded" in text

    def test_scalar_root(self):
        assert render_tree(annotate("hello")).text == '"hello"'

    def test_deep_tree_renders(self):
        value = 0
        for _ in range(1500):
            value = [value]
        result = render_tree(annotate(value, max_depth=2000))
        assert result.node_count == 1501
