"""
Tree annotation: overlay an issue index onto a JSON-like document.

The annotator walks the document once and produces an ``AnnotatedNode``
tree mirroring its shape. Each node carries its own issues, the roll-up
count of issues at or below it, and the strongest severity among its own
issues. The walk is pure: it performs no I/O and never mutates its input.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from issuelens.core.index import EMPTY_INDEX, PathIndex
from issuelens.core.issues import Issue, Severity
from issuelens.core.paths import ROOT, index_path, member_path
from issuelens.core.security import MAX_NESTED_DEPTH
from issuelens.core.severity import strongest

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = MAX_NESTED_DEPTH
DEPTH_EXCEEDED_CODE = "depth-exceeded"


class NodeKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"


@dataclass(frozen=True)
class AnnotatedNode:
    """
    One document node with its issue overlay.

    Attributes:
        path: Locator of this node (``$`` for the root)
        key: Member name when the node is an object member, else None
        kind: object, array, or scalar
        raw_value: The scalar value (None for containers and truncated nodes)
        children: Child nodes in document order
        own_issues: Issues whose path equals ``path`` exactly
        descendant_count: Issues at this node or anywhere beneath it
        dominant_severity: Strongest severity among ``own_issues``
        truncated: True when the depth guard stopped descent here
    """

    path: str
    kind: NodeKind
    key: Optional[str] = None
    raw_value: Any = None
    children: Tuple["AnnotatedNode", ...] = ()
    own_issues: Tuple[Issue, ...] = ()
    descendant_count: int = 0
    dominant_severity: Optional[Severity] = None
    truncated: bool = False

    @property
    def has_issues(self) -> bool:
        return bool(self.own_issues) or self.descendant_count > 0

    def iter_nodes(self) -> Iterator["AnnotatedNode"]:
        """Pre-order walk over this node and all of its descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, path: str) -> Optional["AnnotatedNode"]:
        """Return the node at ``path`` in this subtree, if present."""
        for node in self.iter_nodes():
            if node.path == path:
                return node
        return None

    def to_records(self) -> List[Dict[str, Any]]:
        """
        JSON-ready form of the whole subtree as a flat pre-order node list.

        Each record carries its list position (``id``), its parent's
        position (``None`` for the first record) and its ``depth``;
        containers list their children's positions in document order. The
        output nests to a fixed depth however deep the document is.
        """
        records: List[Dict[str, Any]] = []
        stack: List[Tuple["AnnotatedNode", Optional[int], int]] = [(self, None, 0)]
        while stack:
            node, parent, depth = stack.pop()
            position = len(records)
            records.append(node._node_record(position, parent, depth))
            if parent is not None:
                records[parent]["children"].append(position)
            for child in reversed(node.children):
                stack.append((child, position, depth + 1))
        return records

    def _node_record(self, position: int, parent: Optional[int], depth: int) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": position,
            "parent": parent,
            "depth": depth,
            "path": self.path,
            "kind": self.kind.value,
        }
        if self.key is not None:
            result["key"] = self.key
        if self.kind is NodeKind.SCALAR:
            result["value"] = self.raw_value
        if self.truncated:
            result["truncated"] = True
        result["issues"] = [issue.to_dict() for issue in self.own_issues]
        result["descendant_count"] = self.descendant_count
        result["severity"] = (
            self.dominant_severity.value if self.dominant_severity else None
        )
        if self.kind is not NodeKind.SCALAR:
            result["children"] = []
        return result


def _depth_marker(path: str, max_depth: int) -> Issue:
    return Issue(
        path=path,
        severity=Severity.WARNING,
        code=DEPTH_EXCEEDED_CODE,
        message=f"Nesting exceeds maximum depth of {max_depth}; subtree not annotated",
    )


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


_DONE = object()


class _OpenNode:
    """A container node whose children are still being built."""

    __slots__ = ("path", "key", "kind", "depth", "entries", "children")

    def __init__(
        self,
        path: str,
        key: Optional[str],
        kind: NodeKind,
        depth: int,
        entries: Iterator[Tuple[Any, str, Optional[str]]],
    ):
        self.path = path
        self.key = key
        self.kind = kind
        self.depth = depth
        self.entries = entries
        self.children: List[AnnotatedNode] = []

    def close(self, index: PathIndex) -> AnnotatedNode:
        own_issues = index.issues_at(self.path)
        return AnnotatedNode(
            path=self.path,
            key=self.key,
            kind=self.kind,
            children=tuple(self.children),
            own_issues=own_issues,
            descendant_count=index.count_at(self.path),
            dominant_severity=strongest(own_issues),
        )


def _array_entries(value: Any, path: str) -> Iterator[Tuple[Any, str, Optional[str]]]:
    for i, item in enumerate(value):
        yield item, index_path(path, i), None


def _object_entries(
    value: Mapping, path: str
) -> Iterator[Tuple[Any, str, Optional[str]]]:
    for name, item in value.items():
        name = str(name)
        yield item, member_path(path, name), name


def _open(
    value: Any,
    index: PathIndex,
    path: str,
    key: Optional[str],
    depth: int,
    max_depth: int,
) -> Union[AnnotatedNode, _OpenNode]:
    """Return a finished node for leaves, or an open node for containers."""
    is_array = _is_array(value)
    is_object = not is_array and isinstance(value, Mapping)

    if not (is_array or is_object):
        own_issues = index.issues_at(path)
        return AnnotatedNode(
            path=path,
            key=key,
            kind=NodeKind.SCALAR,
            raw_value=value,
            own_issues=own_issues,
            descendant_count=index.count_at(path),
            dominant_severity=strongest(own_issues),
        )

    if depth >= max_depth:
        logger.debug("Depth guard truncated annotation at %s (depth %d)", path, depth)
        marked = index.issues_at(path) + (_depth_marker(path, max_depth),)
        return AnnotatedNode(
            path=path,
            key=key,
            kind=NodeKind.SCALAR,
            own_issues=marked,
            descendant_count=index.count_at(path),
            dominant_severity=strongest(marked),
            truncated=True,
        )

    if is_array:
        return _OpenNode(path, key, NodeKind.ARRAY, depth, _array_entries(value, path))
    return _OpenNode(path, key, NodeKind.OBJECT, depth, _object_entries(value, path))


def _build(
    value: Any,
    index: PathIndex,
    path: str,
    key: Optional[str],
    max_depth: int,
) -> AnnotatedNode:
    # Explicit stack so document depth never maps onto interpreter depth.
    first = _open(value, index, path, key, 0, max_depth)
    if isinstance(first, AnnotatedNode):
        return first

    stack: List[_OpenNode] = [first]
    while True:
        top = stack[-1]
        entry = next(top.entries, _DONE)
        if entry is _DONE:
            stack.pop()
            finished = top.close(index)
            if not stack:
                return finished
            stack[-1].children.append(finished)
            continue

        child_value, child_path, child_key = entry
        child = _open(child_value, index, child_path, child_key, top.depth + 1, max_depth)
        if isinstance(child, AnnotatedNode):
            top.children.append(child)
        else:
            stack.append(child)


def annotate(
    value: Any,
    index: PathIndex = EMPTY_INDEX,
    path: str = ROOT,
    key: Optional[str] = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> AnnotatedNode:
    """
    Build the annotated tree for ``value``.

    Lists and tuples become arrays, mappings become objects (children in
    insertion order), and everything else, including None, is a scalar.
    Containers at depth ``max_depth`` or deeper (the root is depth 0) are
    not descended; they are emitted as a truncated scalar-kind node that
    carries an extra ``depth-exceeded`` marker issue. Cyclic input is
    bounded by the same guard.

    Args:
        value: JSON-like document or subtree
        index: Issue index from ``build_index``
        path: Locator of ``value`` (defaults to the root)
        key: Member name when ``value`` is an object member
        max_depth: Nesting bound for descent

    Returns:
        Root AnnotatedNode of the subtree
    """
    return _build(value, index, path, key, max(0, max_depth))
