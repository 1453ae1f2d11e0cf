"""
One-shot inspection of a document against a validator report.

Wires the index builder, annotator and list presenter together the way a
viewer consumes them: the index and tree are rebuilt from scratch for each
(document, report) pair.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from issuelens.core.annotate import DEFAULT_MAX_DEPTH, AnnotatedNode, annotate
from issuelens.core.documents import type_label
from issuelens.core.index import PathIndex, build_index
from issuelens.core.issues import EMPTY_REPORT, Issue, ValidationReport
from issuelens.core.presentation import SeverityFilter, parse_severity_filter, present

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inspection:
    """
    Everything needed to show a document with its issues.

    Attributes:
        document_type: Display type of the document ("Unknown" if none)
        report: Validator report (empty when none was given)
        severity_filter: Filter applied to ``issues``
        issues: Filtered issues in display order
        index: Path index over all report issues
        tree: Annotated document, or None when there is no document
    """

    document_type: str
    report: ValidationReport
    severity_filter: SeverityFilter
    issues: Tuple[Issue, ...]
    index: PathIndex
    tree: Optional[AnnotatedNode]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_type": self.document_type,
            "valid": self.report.valid,
            "stats": self.report.stats.to_dict(),
            "severity_filter": getattr(self.severity_filter, "value", self.severity_filter),
            "issues": [issue.to_dict() for issue in self.issues],
            "issue_total": self.index.total,
            "malformed_paths": sorted({issue.path for issue in self.index.malformed}),
            "nodes": self.tree.to_records() if self.tree is not None else None,
        }


def inspect_document(
    document: Any,
    report: Optional[ValidationReport] = None,
    *,
    severity_filter: Union[SeverityFilter, str, None] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Inspection:
    """
    Annotate a document with a report's issues and prepare the issue list.

    A missing report means no issues. A missing document (None) yields no
    tree; the issue list is still prepared.

    Args:
        document: Decoded JSON document, or None
        report: Validator report, or None
        severity_filter: Severity to list, or "all"
        max_depth: Nesting bound for annotation

    Returns:
        Inspection with tree, index and presented issues
    """
    effective_report = report if report is not None else EMPTY_REPORT
    selected = parse_severity_filter(severity_filter)

    index = build_index(effective_report.issues)
    tree = annotate(document, index, max_depth=max_depth) if document is not None else None
    issues = present(effective_report.issues, selected)

    logger.debug(
        "Inspected document: %d issue(s), %d listed, tree=%s",
        len(effective_report.issues),
        len(issues),
        "yes" if tree is not None else "no",
    )

    return Inspection(
        document_type=type_label(document),
        report=effective_report,
        severity_filter=selected,
        issues=issues,
        index=index,
        tree=tree,
    )
