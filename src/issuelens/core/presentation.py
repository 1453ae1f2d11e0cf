"""
Issue list presentation: severity filter plus a stable, total ordering.
"""

from typing import Iterable, Literal, Tuple, Union

from issuelens.core.issues import Issue, Severity, ValidationStats
from issuelens.core.severity import severity_rank

ALL: Literal["all"] = "all"

SeverityFilter = Union[Severity, Literal["all"]]


def parse_severity_filter(value: Union[SeverityFilter, str, None]) -> SeverityFilter:
    """
    Normalize a filter value; ``None`` and ``"all"`` mean no filtering.

    Raises:
        ValueError: If the value is neither ``"all"`` nor a severity
    """
    if value is None:
        return ALL
    if isinstance(value, str) and value.strip().lower() == ALL:
        return ALL
    return Severity.parse(value)


def issue_sort_key(issue: Issue) -> Tuple[int, str, str]:
    return (severity_rank(issue.severity), issue.path, issue.code)


def present(
    issues: Iterable[Issue],
    severity_filter: Union[SeverityFilter, str] = ALL,
) -> Tuple[Issue, ...]:
    """
    Filter issues by severity and order them for list display.

    Sorted by severity (errors first), then path, then code. The sort is
    stable, so issues sharing all three keys keep their input order.

    Args:
        issues: Issues in validator order
        severity_filter: A severity, or ``"all"``

    Returns:
        Tuple of the selected issues in display order
    """
    selected = parse_severity_filter(severity_filter)
    if selected == ALL:
        chosen = list(issues)
    else:
        chosen = [issue for issue in issues if issue.severity is selected]
    return tuple(sorted(chosen, key=issue_sort_key))


def count_by_severity(issues: Iterable[Issue]) -> ValidationStats:
    """Per-severity counts, e.g. for the header of a filtered list."""
    return ValidationStats.from_issues(issues)
