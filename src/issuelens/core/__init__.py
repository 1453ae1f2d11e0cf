"""Issue annotation engine for issuelens."""

from issuelens.core.annotate import (
    DEFAULT_MAX_DEPTH,
    DEPTH_EXCEEDED_CODE,
    AnnotatedNode,
    NodeKind,
    annotate,
)
from issuelens.core.index import EMPTY_INDEX, PathIndex, build_index
from issuelens.core.issues import (
    Issue,
    ReportFormatError,
    Severity,
    ValidationReport,
    ValidationStats,
)
from issuelens.core.paths import ROOT, expand_path
from issuelens.core.presentation import ALL, parse_severity_filter, present
from issuelens.core.severity import (
    SEVERITY_RANK,
    compare_severity,
    severity_rank,
    strongest,
)

__all__ = [
    "ROOT",
    "expand_path",
    "PathIndex",
    "EMPTY_INDEX",
    "build_index",
    "SEVERITY_RANK",
    "severity_rank",
    "compare_severity",
    "strongest",
    "AnnotatedNode",
    "NodeKind",
    "annotate",
    "DEFAULT_MAX_DEPTH",
    "DEPTH_EXCEEDED_CODE",
    "ALL",
    "parse_severity_filter",
    "present",
    "Issue",
    "Severity",
    "ValidationReport",
    "ValidationStats",
    "ReportFormatError",
]
