"""
Seams to the external converter and validator.

issuelens does not define conversion or validation rules. It calls a
converter ``convert(document, mode)`` and a validator
``validate(document, options)`` supplied by the caller (or resolved from a
``module:attribute`` reference) and passes their failures through.
"""

import importlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple

from issuelens.core.documents import dump_document
from issuelens.core.issues import ReportFormatError, ValidationReport

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Raised when the external converter fails."""


class ValidatorError(Exception):
    """Raised when the external validator fails without a usable report."""


class Converter(Protocol):
    def __call__(self, document: Any, mode: str) -> Any: ...


class Validator(Protocol):
    def __call__(self, document: Any, options: Mapping[str, Any]) -> Any: ...


@dataclass(frozen=True)
class ConversionMode:
    id: str
    label: str
    hint: str


CONVERSION_MODES: Tuple[ConversionMode, ...] = (
    ConversionMode("2to3", "2 -> 3", "Upgrade Presentation API 2 to 3"),
    ConversionMode("3to4", "3 -> 4", "Upgrade Presentation API 3 to 4"),
    ConversionMode("4to3", "4 -> 3", "Downgrade Presentation API 4 to 3"),
)
CONVERSION_MODE_IDS: Tuple[str, ...] = tuple(mode.id for mode in CONVERSION_MODES)

VALIDATION_MODES: Tuple[str, ...] = ("tolerant", "strict")


@dataclass(frozen=True)
class ConversionResult:
    """
    Converted document plus before/after text for an external diff view.
    """

    mode: str
    document: Any
    before: str
    after: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "document": self.document,
            "before": self.before,
            "after": self.after,
        }


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Validator result. ``warning`` is set when the validator failed but
    still produced a partial report.
    """

    report: ValidationReport
    warning: Optional[str] = None

    @property
    def partial(self) -> bool:
        return self.warning is not None


def run_conversion(document: Any, mode: str, converter: Converter) -> ConversionResult:
    """
    Convert a document with the external converter.

    Raises:
        ValueError: If ``mode`` is not a known conversion mode
        ConversionError: If the converter fails for any reason
    """
    if mode not in CONVERSION_MODE_IDS:
        raise ValueError(
            f"Unknown conversion mode {mode!r} (expected one of: {', '.join(CONVERSION_MODE_IDS)})"
        )

    try:
        converted = converter(document, mode)
    except ConversionError:
        raise
    except Exception as exc:
        message = str(exc) or "Unknown conversion error"
        raise ConversionError(message) from exc

    try:
        before = dump_document(document)
        after = dump_document(converted)
    except (TypeError, ValueError) as exc:
        raise ConversionError(f"Converter returned a non-JSON document: {exc}") from exc

    logger.debug("Converted document with mode %s", mode)
    return ConversionResult(mode=mode, document=converted, before=before, after=after)


def run_validation(
    document: Any,
    validator: Validator,
    mode: str = "tolerant",
) -> ValidationOutcome:
    """
    Validate a document with the external validator.

    A validator exception carrying a ``report`` attribute is treated as a
    recoverable failure: its report is returned with the exception text as
    a warning.

    Raises:
        ValueError: If ``mode`` is not a known validation mode
        ValidatorError: If the validator fails without a report, or returns
            something that is not a report
    """
    if mode not in VALIDATION_MODES:
        raise ValueError(
            f"Unknown validation mode {mode!r} (expected one of: {', '.join(VALIDATION_MODES)})"
        )

    try:
        raw = validator(document, {"mode": mode})
        warning = None
    except Exception as exc:
        partial = getattr(exc, "report", None)
        if partial is None:
            raise ValidatorError(str(exc) or "Unknown validation error") from exc
        logger.warning("Validator failed with a partial report: %s", exc)
        raw = partial
        warning = str(exc) or "Validation did not complete"

    try:
        report = ValidationReport.from_dict(raw)
    except ReportFormatError as exc:
        raise ValidatorError(f"Validator returned an unusable report: {exc}") from exc

    return ValidationOutcome(report=report, warning=warning)


def load_collaborator(reference: str) -> Callable[..., Any]:
    """
    Resolve a ``package.module:attribute`` reference to a callable.

    Raises:
        ValueError: If the reference is malformed, cannot be imported, or
            does not name a callable
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected 'module:attribute', got {reference!r}")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import module {module_name!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from exc

    if not callable(target):
        raise ValueError(f"{reference!r} is not callable")
    return target
