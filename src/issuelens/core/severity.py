"""
Severity ordering shared by the annotated tree and the issue list.

Both the per-node dominant severity and the list sort use the same rank
table, so the two views always agree on which issue is "worst".
"""

from typing import Dict, Iterable, Optional

from issuelens.core.issues import Issue, Severity

SEVERITY_RANK: Dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


def severity_rank(severity: Severity) -> int:
    """Rank of a severity; lower is stronger."""
    return SEVERITY_RANK[severity]


def compare_severity(a: Severity, b: Severity) -> int:
    """
    Three-way comparison under ``error < warning < info``.

    Returns:
        Negative if ``a`` is stronger than ``b``, zero if equal, positive otherwise
    """
    return severity_rank(a) - severity_rank(b)


def strongest_severity(severities: Iterable[Severity]) -> Optional[Severity]:
    """Strongest of a collection of severities, or None when empty."""
    best: Optional[Severity] = None
    for severity in severities:
        if best is None or severity_rank(severity) < severity_rank(best):
            best = severity
            if best is Severity.ERROR:
                break
    return best


def strongest(issues: Iterable[Issue]) -> Optional[Severity]:
    """
    Strongest severity present among ``issues``.

    The result depends only on which severities occur, never on issue
    order or identity.

    Args:
        issues: Issues to inspect

    Returns:
        The minimum severity under the fixed order, or None for no issues
    """
    return strongest_severity(issue.severity for issue in issues)
