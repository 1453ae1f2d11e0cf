"""Input loading shared by CLI commands.

Each helper either returns the loaded value or emits an error envelope
and exits.
"""

from typing import Any, Callable, Optional

from issuelens.cli.output import emit_error
from issuelens.core.collaborators import load_collaborator
from issuelens.core.documents import DocumentParseError, load_document, load_report
from issuelens.core.issues import ReportFormatError, ValidationReport
from issuelens.core.security import InputTooLargeError


def load_document_or_exit(source: str) -> Any:
    try:
        return load_document(source)
    except FileNotFoundError:
        emit_error(
            f"Document not found: {source}",
            code="NOT_FOUND",
            error_type="not_found",
            remediation="Check the document path",
            details={"path": source},
        )
    except OSError as exc:
        emit_error(
            f"Cannot read document: {exc.strerror or exc}",
            code="UNREADABLE_INPUT",
            error_type="validation",
            remediation="Pass a readable file, or - for stdin",
            details={"path": source},
        )
    except InputTooLargeError as exc:
        emit_error(
            str(exc),
            code="INPUT_TOO_LARGE",
            error_type="validation",
            details={"path": source, "size": exc.size, "limit": exc.limit},
        )
    except DocumentParseError as exc:
        emit_error(
            str(exc),
            code="INVALID_FORMAT",
            error_type="validation",
            remediation="Provide a valid JSON document",
            details={"path": source},
        )


def load_report_or_exit(source: str) -> ValidationReport:
    try:
        return load_report(source)
    except FileNotFoundError:
        emit_error(
            f"Report not found: {source}",
            code="NOT_FOUND",
            error_type="not_found",
            remediation="Check the report path",
            details={"path": source},
        )
    except OSError as exc:
        emit_error(
            f"Cannot read report: {exc.strerror or exc}",
            code="UNREADABLE_INPUT",
            error_type="validation",
            remediation="Pass a readable file, or - for stdin",
            details={"path": source},
        )
    except InputTooLargeError as exc:
        emit_error(
            str(exc),
            code="INPUT_TOO_LARGE",
            error_type="validation",
            details={"path": source, "size": exc.size, "limit": exc.limit},
        )
    except DocumentParseError as exc:
        emit_error(
            str(exc),
            code="INVALID_FORMAT",
            error_type="validation",
            remediation="Provide the validator report as JSON",
            details={"path": source},
        )
    except ReportFormatError as exc:
        emit_error(
            f"Invalid report: {exc}",
            code="INVALID_REPORT",
            error_type="validation",
            remediation="Each issue needs path, severity (error/warning/info) and code",
            details={"path": source},
        )


def resolve_collaborator_or_exit(reference: Optional[str], kind: str) -> Callable[..., Any]:
    if not reference:
        emit_error(
            f"No {kind} configured",
            code="COLLABORATOR_UNAVAILABLE",
            error_type="validation",
            remediation=(
                f"Pass --{kind} module:function or set ISSUELENS_{kind.upper()}"
            ),
        )
    try:
        return load_collaborator(reference)
    except ValueError as exc:
        emit_error(
            f"Cannot load {kind}: {exc}",
            code="COLLABORATOR_UNAVAILABLE",
            error_type="validation",
            details={"reference": reference},
        )
