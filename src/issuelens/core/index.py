"""
Issue index construction.

Turns a flat issue list into two lookups keyed by path:

- ``exact``: the issues whose own path is exactly that key, in input order
- ``cumulative``: how many issues sit at that path or anywhere beneath it
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from issuelens.core.issues import Issue
from issuelens.core.paths import ROOT, expand_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathIndex:
    """
    Read-only per-path issue lookups built by ``build_index``.

    Attributes:
        exact: Path -> issues whose path equals it verbatim
        cumulative: Path -> number of issues whose ancestor chain includes it
        malformed: Issues whose path does not start at the root marker
    """

    exact: Mapping[str, Tuple[Issue, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    cumulative: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    malformed: Tuple[Issue, ...] = ()

    def issues_at(self, path: str) -> Tuple[Issue, ...]:
        return self.exact.get(path, ())

    def count_at(self, path: str) -> int:
        return self.cumulative.get(path, 0)

    @property
    def total(self) -> int:
        """Number of well-formed issues (the root roll-up count)."""
        return self.cumulative.get(ROOT, 0)

    def to_dict(self) -> Dict[str, object]:
        return {
            "exact": {
                path: [issue.to_dict() for issue in issues]
                for path, issues in self.exact.items()
            },
            "cumulative": dict(self.cumulative),
            "malformed": [issue.to_dict() for issue in self.malformed],
        }


def build_index(issues: Iterable[Issue]) -> PathIndex:
    """
    Index issues by exact path and by every ancestor path.

    Each issue contributes at most one to each distinct ancestor. Issues
    with malformed paths are still listed under their literal path in
    ``exact`` but are left out of every cumulative count.

    Args:
        issues: Issues in validator order

    Returns:
        Immutable PathIndex
    """
    exact: Dict[str, List[Issue]] = {}
    cumulative: Dict[str, int] = {}
    malformed: List[Issue] = []

    for issue in issues:
        exact.setdefault(issue.path, []).append(issue)

        ancestors = expand_path(issue.path)
        if not ancestors:
            malformed.append(issue)
            continue

        # dict.fromkeys dedupes while keeping order
        for ancestor in dict.fromkeys(ancestors):
            cumulative[ancestor] = cumulative.get(ancestor, 0) + 1

    if malformed:
        logger.debug(
            "Skipped %d issue(s) with malformed paths during roll-up", len(malformed)
        )
    logger.debug(
        "Built path index: %d exact paths, %d cumulative paths",
        len(exact),
        len(cumulative),
    )

    return PathIndex(
        exact=MappingProxyType({path: tuple(items) for path, items in exact.items()}),
        cumulative=MappingProxyType(cumulative),
        malformed=tuple(malformed),
    )


EMPTY_INDEX = PathIndex()
