"""
Document and report loading.

Reads JSON documents and validator reports from files or stdin, applying
size limits before parsing.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Union

from issuelens.core.issues import ReportFormatError, ValidationReport
from issuelens.core.security import MAX_ISSUE_COUNT, check_input_size

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


class DocumentParseError(ValueError):
    """Raised when document text is not valid JSON."""


def parse_document(text: Union[str, bytes], *, max_size: Optional[int] = None) -> Any:
    """
    Parse document text as JSON.

    Args:
        text: Raw JSON text
        max_size: Optional size limit in bytes

    Returns:
        Decoded JSON value

    Raises:
        InputTooLargeError: If the text exceeds the size limit
        DocumentParseError: If the text is not valid JSON
    """
    check_input_size(text, max_size, what="document")
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DocumentParseError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise DocumentParseError("Invalid JSON: document is nested too deeply") from exc


def read_source(source: Union[str, Path]) -> Union[str, bytes]:
    """
    Raw contents of a file path, or of stdin when ``source`` is ``-``.

    Files are read as bytes so that decoding happens in ``parse_document``.
    """
    if str(source) == STDIN_MARKER:
        return sys.stdin.read()
    return Path(source).read_bytes()


def load_document(source: Union[str, Path], *, max_size: Optional[int] = None) -> Any:
    """Load and parse a JSON document from a path (or ``-`` for stdin)."""
    document = parse_document(read_source(source), max_size=max_size)
    logger.debug("Loaded document from %s (type=%s)", source, type_label(document))
    return document


def parse_report(text: Union[str, bytes], *, max_size: Optional[int] = None) -> ValidationReport:
    """
    Parse validator report text.

    Raises:
        DocumentParseError: If the text is not valid JSON
        ReportFormatError: If the JSON is not a usable report
    """
    report = ValidationReport.from_dict(parse_document(text, max_size=max_size))
    if len(report.issues) > MAX_ISSUE_COUNT:
        raise ReportFormatError(
            f"Report has {len(report.issues)} issues (maximum {MAX_ISSUE_COUNT})"
        )
    return report


def load_report(source: Union[str, Path], *, max_size: Optional[int] = None) -> ValidationReport:
    """Load a validator report from a path (or ``-`` for stdin)."""
    report = parse_report(read_source(source), max_size=max_size)
    logger.debug("Loaded report from %s with %d issue(s)", source, len(report.issues))
    return report


def type_label(document: Any) -> str:
    """
    Resource type of a document, for display.

    Uses ``type`` then ``@type``; a list-valued type yields its first
    string entry. Anything else is ``"Unknown"``.
    """
    if not isinstance(document, dict):
        return "Unknown"

    resource_type = document.get("type") or document.get("@type")
    if isinstance(resource_type, str):
        return resource_type
    if isinstance(resource_type, list) and resource_type and isinstance(resource_type[0], str):
        return resource_type[0]
    return "Unknown"


def dump_document(document: Any) -> str:
    """Pretty JSON text (two-space indent) for side-by-side comparison."""
    return json.dumps(document, indent=2, ensure_ascii=False)
