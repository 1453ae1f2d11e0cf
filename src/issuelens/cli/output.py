"""JSON output helpers for the issuelens CLI.

This module provides the sole output mechanism for the CLI. Success
envelopes go to stdout; error envelopes go to stderr with exit code 1.
Both use the response-v2 envelope from issuelens.core.responses.
"""

import json
import sys
from typing import Any, Mapping, Sequence, NoReturn

from issuelens.cli.logging import get_request_id
from issuelens.core.responses import error_response, success_response


def emit(data: Any) -> None:
    """Emit minified JSON to stdout.

    Args:
        data: Any JSON-serializable data structure.
    """
    print(json.dumps(data, separators=(",", ":"), default=str))


def emit_error(
    message: str,
    code: str = "INTERNAL_ERROR",
    *,
    error_type: str = "internal",
    remediation: str | None = None,
    details: Mapping[str, Any] | None = None,
) -> NoReturn:
    """Emit error JSON to stderr and exit with code 1.

    Args:
        message: Human-readable error description.
        code: Error code in SCREAMING_SNAKE_CASE (e.g., INVALID_REPORT).
        error_type: Error category for routing (validation, not_found, ...).
        remediation: Actionable guidance for resolving the error.
        details: Optional additional error context.

    Raises:
        SystemExit: Always exits with code 1.
    """
    response = error_response(
        message=message,
        error_code=code,
        error_type=error_type,
        remediation=remediation,
        details=details,
        request_id=get_request_id() or None,
    )
    print(json.dumps(response.to_dict(), separators=(",", ":"), default=str), file=sys.stderr)
    sys.exit(1)


def emit_success(
    data: Any,
    *,
    warnings: Sequence[str] | None = None,
    telemetry: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
) -> None:
    """Emit success response envelope to stdout.

    Args:
        data: The operation-specific payload (non-dict data is wrapped
            under a ``result`` key).
        warnings: Non-fatal issues to surface in meta.warnings.
        telemetry: Timing/performance metadata.
        meta: Additional metadata to merge into meta object.
    """
    payload = data if isinstance(data, dict) else {"result": data}
    response = success_response(
        data=payload,
        warnings=warnings,
        telemetry=telemetry,
        meta=meta,
        request_id=get_request_id() or None,
    )
    emit(response.to_dict())
