"""
Annotation tools for issuelens.

Provides MCP tools that overlay validator issues onto a JSON document,
list issues in display order, and expose the path index.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from mcp.server.fastmcp import FastMCP

from issuelens.config import ServerConfig
from issuelens.core.documents import DocumentParseError, parse_document
from issuelens.core.index import build_index
from issuelens.core.inspection import inspect_document
from issuelens.core.issues import ReportFormatError, ValidationReport
from issuelens.core.naming import canonical_tool
from issuelens.core.paths import expand_path
from issuelens.core.presentation import parse_severity_filter, present
from issuelens.core.rendering import RenderOptions, render_tree
from issuelens.core.responses import (
    ErrorCode,
    ErrorType,
    error_response,
    sanitize_error_message,
    success_response,
    validation_error,
)
from issuelens.core.security import InputTooLargeError

logger = logging.getLogger(__name__)

ReportInput = Union[Dict[str, Any], List[Dict[str, Any]], None]


def _decode(value: Any) -> Any:
    """Accept either decoded JSON or JSON text."""
    if isinstance(value, (str, bytes)):
        return parse_document(value)
    return value


def _report_from(value: ReportInput) -> Optional[ValidationReport]:
    if value is None:
        return None
    return ValidationReport.from_dict(_decode(value))


def _input_error(exc: Exception) -> dict:
    if isinstance(exc, ReportFormatError):
        return error_response(
            f"Invalid report: {exc}",
            error_code=ErrorCode.INVALID_REPORT,
            error_type=ErrorType.VALIDATION,
            remediation="Each issue needs path, severity (error/warning/info) and code",
        ).to_dict()
    if isinstance(exc, InputTooLargeError):
        return error_response(
            str(exc),
            error_code=ErrorCode.INPUT_TOO_LARGE,
            error_type=ErrorType.VALIDATION,
        ).to_dict()
    if isinstance(exc, DocumentParseError):
        return error_response(
            str(exc),
            error_code=ErrorCode.INVALID_FORMAT,
            error_type=ErrorType.VALIDATION,
        ).to_dict()
    return validation_error(str(exc)).to_dict()


def annotate_document(
    config: ServerConfig,
    document: Any,
    report: ReportInput = None,
    severity: Optional[str] = None,
    max_depth: Optional[int] = None,
    include_outline: bool = False,
) -> dict:
    """Annotate a document with report issues; returns a response envelope dict."""
    try:
        doc = _decode(document)
        parsed_report = _report_from(report)
        selected = parse_severity_filter(severity or config.annotation.severity_filter)
    except (DocumentParseError, ReportFormatError, InputTooLargeError, ValueError) as exc:
        return _input_error(exc)

    if max_depth is not None and max_depth < 0:
        return validation_error("max_depth must be >= 0", field="max_depth").to_dict()

    try:
        inspection = inspect_document(
            doc,
            parsed_report,
            severity_filter=selected,
            max_depth=config.annotation.max_depth if max_depth is None else max_depth,
        )
        data = inspection.to_dict()
        if include_outline and inspection.tree is not None:
            data["outline"] = render_tree(inspection.tree, RenderOptions()).text
        return success_response(data).to_dict()
    except Exception as e:
        logger.error(f"Error annotating document: {e}")
        return error_response(sanitize_error_message(e, context="document annotation")).to_dict()


def present_issues(
    config: ServerConfig,
    report: ReportInput,
    severity: Optional[str] = None,
) -> dict:
    """List report issues in display order; returns a response envelope dict."""
    try:
        parsed_report = _report_from(report)
        selected = parse_severity_filter(severity or config.annotation.severity_filter)
    except (DocumentParseError, ReportFormatError, InputTooLargeError, ValueError) as exc:
        return _input_error(exc)

    issues = present(parsed_report.issues if parsed_report else (), selected)
    return success_response(
        severity_filter=getattr(selected, "value", selected),
        count=len(issues),
        issues=[issue.to_dict() for issue in issues],
    ).to_dict()


def index_issues(report: ReportInput) -> dict:
    """Build the path index for a report; returns a response envelope dict."""
    try:
        parsed_report = _report_from(report)
    except (DocumentParseError, ReportFormatError, InputTooLargeError, ValueError) as exc:
        return _input_error(exc)

    index = build_index(parsed_report.issues if parsed_report else ())
    return success_response({"total": index.total, **index.to_dict()}).to_dict()


def expand_paths(paths: List[str]) -> dict:
    """Expand issue paths into ancestor chains; returns a response envelope dict."""
    results = []
    for path in paths:
        ancestors = expand_path(path)
        results.append(
            {"path": path, "well_formed": bool(ancestors), "ancestors": list(ancestors)}
        )
    return success_response(paths=results).to_dict()


def register_annotation_tools(mcp: FastMCP, config: ServerConfig) -> None:
    """
    Register annotation tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Server configuration
    """

    @canonical_tool(
        mcp,
        canonical_name="document-annotate",
    )
    def document_annotate(
        document: Any,
        report: ReportInput = None,
        severity: Optional[str] = None,
        max_depth: Optional[int] = None,
        include_outline: bool = False,
    ) -> dict:
        """
        Overlay validator issues onto a JSON document.

        The tree comes back as a flat pre-order "nodes" list; each node
        holds its parent and children ids, its own issues, the number of
        issues at or beneath it and the strongest severity among its own
        issues.

        Args:
            document: JSON document (object/array/scalar, or JSON text)
            report: Validator report ({valid, issues, stats}) or list of issues
            severity: Issue list filter ("all", "error", "warning", "info")
            max_depth: Containers nested this deep are not descended
            include_outline: Also return a plain-text outline of the tree

        Returns:
            JSON object with the annotated nodes, sorted issues and stats
        """
        return annotate_document(
            config,
            document,
            report=report,
            severity=severity,
            max_depth=max_depth,
            include_outline=include_outline,
        )

    @canonical_tool(
        mcp,
        canonical_name="issues-present",
    )
    def issues_present(report: ReportInput, severity: Optional[str] = None) -> dict:
        """
        List validator issues errors-first, then by path and code.

        Args:
            report: Validator report ({valid, issues, stats}) or list of issues
            severity: Issue list filter ("all", "error", "warning", "info")

        Returns:
            JSON object with the filtered, sorted issues
        """
        return present_issues(config, report, severity=severity)

    @canonical_tool(
        mcp,
        canonical_name="issues-index",
    )
    def issues_index(report: ReportInput) -> dict:
        """
        Index validator issues by exact path and by every ancestor path.

        Args:
            report: Validator report ({valid, issues, stats}) or list of issues

        Returns:
            JSON object with exact issues, cumulative counts and malformed issues
        """
        return index_issues(report)

    @canonical_tool(
        mcp,
        canonical_name="path-expand",
    )
    def path_expand(paths: List[str]) -> dict:
        """
        Expand issue paths such as "$.items[0].body" into their ancestor chains.

        Args:
            paths: Issue paths to expand

        Returns:
            JSON object with root-first ancestor chains per path
        """
        return expand_paths(paths)
