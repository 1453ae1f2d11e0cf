"""
Standard response contracts for issuelens tools and CLI commands.

All responses follow the same envelope:

    {
        "success": bool,       # Required: operation success/failure
        "data": {...},         # Required: primary payload (empty dict on error)
        "error": str | null,   # Required: error message or null on success
        "meta": {              # Required: response metadata
            "version": "response-v2",
            "request_id": "req_abc123"?,
            "warnings": ["..."]?,
            "telemetry": { ... }?
        }
    }

Key Principle:
    - `success=True` means the operation executed correctly (even if the
      document has issues; issues are data, not failures).
    - `success=False` means the operation failed to execute (unreadable
      input, collaborator failure); include actionable error details.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from issuelens.core.context import get_correlation_id

logger = logging.getLogger(__name__)

RESPONSE_VERSION = "response-v2"


class ErrorCode(str, Enum):
    """Machine-readable error codes, SCREAMING_SNAKE_CASE."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_REPORT = "INVALID_REPORT"
    INPUT_TOO_LARGE = "INPUT_TOO_LARGE"
    UNREADABLE_INPUT = "UNREADABLE_INPUT"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"

    # Collaborator errors
    CONVERSION_FAILED = "CONVERSION_FAILED"
    VALIDATOR_FAILED = "VALIDATOR_FAILED"
    COLLABORATOR_UNAVAILABLE = "COLLABORATOR_UNAVAILABLE"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Error categories for routing and client-side handling."""

    VALIDATION = "validation"  # 400 - No retry, fix input
    NOT_FOUND = "not_found"  # 404 - No retry
    COLLABORATOR = "collaborator"  # External converter/validator failed
    INTERNAL = "internal"  # 500


@dataclass
class ToolResponse:
    """
    Standard response structure.

    Attributes:
        success: Whether the operation completed successfully
        data: The primary payload (operation-specific structured data)
        error: Error message if success is False, None otherwise
        meta: Response metadata including version identifier
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": RESPONSE_VERSION})

    def to_dict(self) -> Dict[str, Any]:
        """Envelope as a plain dict; payload values are passed through uncopied."""
        return {
            "success": self.success,
            "data": dict(self.data),
            "error": self.error,
            "meta": dict(self.meta),
        }


def _build_meta(
    *,
    request_id: Optional[str] = None,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Construct a metadata payload that always includes the response version."""
    meta: Dict[str, Any] = {"version": RESPONSE_VERSION}

    effective_request_id = request_id or get_correlation_id() or None
    if effective_request_id:
        meta["request_id"] = effective_request_id
    if warnings:
        meta["warnings"] = list(warnings)
    if telemetry:
        meta["telemetry"] = dict(telemetry)
    if extra:
        meta.update(dict(extra))

    return meta


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> ToolResponse:
    """Create a standardized success response.

    Args:
        data: Optional mapping used as the base payload.
        warnings: Non-fatal issues to surface in ``meta.warnings``.
        telemetry: Timing/performance metadata.
        request_id: Correlation identifier propagated through logs.
        meta: Arbitrary extra metadata to merge into ``meta``.
        **fields: Additional payload fields (shorthand for ``data.update``).
    """
    payload: Dict[str, Any] = {}
    if data:
        payload.update(dict(data))
    if fields:
        payload.update(fields)

    meta_payload = _build_meta(
        request_id=request_id,
        warnings=warnings,
        telemetry=telemetry,
        extra=meta,
    )
    return ToolResponse(success=True, data=payload, error=None, meta=meta_payload)


def error_response(
    message: str,
    *,
    data: Optional[Mapping[str, Any]] = None,
    error_code: Optional[Union[ErrorCode, str]] = None,
    error_type: Optional[Union[ErrorType, str]] = None,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized error response.

    Args:
        message: Human-readable description of the failure.
        data: Optional mapping with additional machine-readable context.
        error_code: Canonical error code (``ErrorCode`` or string).
        error_type: Error category for routing (``ErrorType`` or string).
        remediation: User-facing guidance on how to fix the issue.
        details: Nested structure describing the failure.
        request_id: Correlation identifier propagated through logs.
        meta: Arbitrary extra metadata to merge into ``meta``.
    """
    payload: Dict[str, Any] = {}
    if data:
        payload.update(dict(data))

    effective_error_code = error_code if error_code is not None else ErrorCode.INTERNAL_ERROR
    effective_error_type = error_type if error_type is not None else ErrorType.INTERNAL

    payload.setdefault(
        "error_code",
        effective_error_code.value if isinstance(effective_error_code, Enum) else effective_error_code,
    )
    payload.setdefault(
        "error_type",
        effective_error_type.value if isinstance(effective_error_type, Enum) else effective_error_type,
    )
    if remediation is not None:
        payload.setdefault("remediation", remediation)
    if details:
        payload.setdefault("details", dict(details))

    meta_payload = _build_meta(request_id=request_id, extra=meta)
    return ToolResponse(success=False, data=payload, error=message, meta=meta_payload)


def validation_error(
    message: str,
    *,
    field: Optional[str] = None,
    remediation: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create a validation error response (HTTP 400 analog)."""
    return error_response(
        message,
        error_code=ErrorCode.VALIDATION_ERROR,
        error_type=ErrorType.VALIDATION,
        details={"field": field} if field else None,
        remediation=remediation,
        request_id=request_id,
    )


def sanitize_error_message(exc: Exception, context: str = "") -> str:
    """
    Convert an unexpected exception to a user-safe message.

    The full exception is logged at debug level; the returned text never
    includes paths or stack details.
    """
    if context:
        logger.debug(f"Error in {context}: {exc}", exc_info=True)
    else:
        logger.debug(f"Error: {exc}", exc_info=True)

    if isinstance(exc, FileNotFoundError):
        return "Required file or resource not found"
    if isinstance(exc, json.JSONDecodeError):
        return "Invalid JSON format"
    if isinstance(exc, PermissionError):
        return "Permission denied for requested operation"
    if isinstance(exc, OSError):
        return "System I/O error occurred"
    return "An internal error occurred"
