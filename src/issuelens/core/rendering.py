"""
Rendering operations for annotated trees.
Provides a plain-text outline of a document with inline issues.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from issuelens.core.annotate import AnnotatedNode, NodeKind


# Data structures

@dataclass
class RenderOptions:
    """
    Options for tree rendering.
    """
    show_issues: bool = True
    indent: int = 2
    max_depth: int = 0  # 0 = unlimited


@dataclass
class RenderResult:
    """
    Result of rendering an annotated tree.
    """
    text: str
    node_count: int = 0
    annotated_count: int = 0


TRUNCATED_LABEL = "<truncated>"
COLLAPSED_LABEL = "..."

_BRACKETS = {
    NodeKind.OBJECT: ("{", "}"),
    NodeKind.ARRAY: ("[", "]"),
}


def format_primitive(value: Any) -> str:
    """
    Format a scalar the way it appears in JSON.

    Args:
        value: Scalar value

    Returns:
        JSON text for strings, numbers, booleans and null
    """
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return json.dumps(value, default=str, ensure_ascii=False)


def format_pill(node: AnnotatedNode) -> str:
    """Roll-up count badge, tagged with the node's own dominant severity."""
    if node.descendant_count <= 0:
        return ""
    if node.dominant_severity is None:
        return f"  [{node.descendant_count}]"
    return f"  [{node.descendant_count} {node.dominant_severity.value}]"


def _label(node: AnnotatedNode) -> str:
    return f"{json.dumps(node.key, ensure_ascii=False)}: " if node.key is not None else ""


def _summary(node: AnnotatedNode) -> str:
    count = len(node.children)
    noun = "items" if node.kind is NodeKind.ARRAY else "properties"
    return f"{count} {noun}"


# Main rendering function

def render_tree(
    node: AnnotatedNode,
    options: Union[RenderOptions, None] = None,
) -> RenderResult:
    """
    Render an annotated tree as an indented text outline.

    Containers show their bracket, child count and roll-up badge; scalars
    show their JSON value. Own issues are listed beneath the node they
    belong to.

    Args:
        node: Root of the annotated tree
        options: Optional rendering options

    Returns:
        RenderResult with the outline text and counts
    """
    if options is None:
        options = RenderOptions()

    pad = " " * max(0, options.indent)
    lines: List[str] = []
    node_count = 0
    annotated_count = 0

    # (node, depth) to open, or (closing text, depth) to emit
    stack: List[Tuple[Union[AnnotatedNode, str], int]] = [(node, 0)]
    while stack:
        item, depth = stack.pop()
        prefix = pad * depth
        if isinstance(item, str):
            lines.append(prefix + item)
            continue

        node_count += 1
        if item.own_issues:
            annotated_count += 1

        if item.truncated:
            lines.append(f"{prefix}{_label(item)}{TRUNCATED_LABEL}{format_pill(item)}")
        elif item.kind is NodeKind.SCALAR:
            lines.append(
                f"{prefix}{_label(item)}{format_primitive(item.raw_value)}{format_pill(item)}"
            )
        else:
            opener, closer = _BRACKETS[item.kind]
            lines.append(
                f"{prefix}{_label(item)}{opener}  {_summary(item)}{format_pill(item)}"
            )

        if options.show_issues:
            for issue in item.own_issues:
                lines.append(
                    f"{prefix}{pad}-> {issue.severity.value} {issue.code}: {issue.message}"
                )

        if item.kind is NodeKind.SCALAR:
            continue

        stack.append((closer, depth))
        if options.max_depth and depth + 1 > options.max_depth and item.children:
            stack.append((COLLAPSED_LABEL, depth + 1))
            continue
        for child in reversed(item.children):
            stack.append((child, depth + 1))

    return RenderResult(
        text="\n".join(lines),
        node_count=node_count,
        annotated_count=annotated_count,
    )
