"""
Issue and validation report data structures.

Issues are produced by an external validator and are never mutated here.
The loaders in this module are the only place where raw report payloads
are checked; everything downstream works with typed ``Issue`` values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union


class ReportFormatError(ValueError):
    """Raised when a report payload cannot be turned into issues."""


class Severity(str, Enum):
    """Closed set of issue severities, strongest first."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def parse(cls, value: Union["Severity", str]) -> "Severity":
        """Coerce a severity or its (case-insensitive) string value.

        Raises:
            ValueError: If the value is not a known severity.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown severity {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class Issue:
    """
    A single diagnostic attached to a document path.

    ``path`` uses ``$`` for the root, ``.key`` for object members and
    ``[i]`` for array elements (e.g. ``$.items[0].body.format``).
    """

    path: str
    severity: Severity
    code: str
    message: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Issue":
        if not isinstance(data, Mapping):
            raise ReportFormatError(
                f"Issue entries must be objects, got {type(data).__name__}"
            )
        missing = [name for name in ("path", "severity", "code") if name not in data]
        if missing:
            raise ReportFormatError(f"Issue is missing field(s): {', '.join(missing)}")
        try:
            severity = Severity.parse(data["severity"])
        except ValueError as exc:
            raise ReportFormatError(str(exc)) from exc
        return cls(
            path=str(data["path"]),
            severity=severity,
            code=str(data["code"]),
            message=str(data.get("message", "")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": self.path,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
        }


@dataclass(frozen=True)
class ValidationStats:
    """Per-severity issue counts as reported alongside a validation run."""

    errors: int = 0
    warnings: int = 0
    info: int = 0

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> "ValidationStats":
        counts = {Severity.ERROR: 0, Severity.WARNING: 0, Severity.INFO: 0}
        for issue in issues:
            counts[issue.severity] += 1
        return cls(
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARNING],
            info=counts[Severity.INFO],
        )

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.info

    def to_dict(self) -> Dict[str, int]:
        return {"errors": self.errors, "warnings": self.warnings, "info": self.info}


@dataclass(frozen=True)
class ValidationReport:
    """
    Result of validating a document with the external validator.
    """

    valid: bool
    issues: Tuple[Issue, ...] = ()
    stats: ValidationStats = field(default_factory=ValidationStats)

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> "ValidationReport":
        issue_tuple = tuple(issues)
        stats = ValidationStats.from_issues(issue_tuple)
        return cls(valid=stats.errors == 0, issues=issue_tuple, stats=stats)

    @classmethod
    def from_dict(cls, data: Any) -> "ValidationReport":
        """
        Build a report from a decoded JSON payload.

        Accepts either a ``{"valid", "issues", "stats"}`` object or a bare
        list of issue objects. Missing stats are computed from the issues;
        a missing ``valid`` flag means "no error-severity issues".

        Raises:
            ReportFormatError: If the payload is not a usable report.
        """
        if isinstance(data, ValidationReport):
            return data
        if isinstance(data, list):
            return cls.from_issues(Issue.from_dict(item) for item in data)
        if not isinstance(data, Mapping):
            raise ReportFormatError(
                f"Report must be an object or a list of issues, got {type(data).__name__}"
            )

        raw_issues = data.get("issues", [])
        if not isinstance(raw_issues, list):
            raise ReportFormatError("Report 'issues' must be a list")
        issues = tuple(Issue.from_dict(item) for item in raw_issues)

        raw_stats = data.get("stats")
        if isinstance(raw_stats, Mapping):
            stats = ValidationStats(
                errors=int(raw_stats.get("errors", 0)),
                warnings=int(raw_stats.get("warnings", 0)),
                info=int(raw_stats.get("info", 0)),
            )
        else:
            stats = ValidationStats.from_issues(issues)

        valid = data.get("valid")
        if valid is None:
            valid = not any(issue.severity is Severity.ERROR for issue in issues)

        return cls(valid=bool(valid), issues=issues, stats=stats)

    def to_dict(self) -> Dict[str, Any]:
        issues: List[Dict[str, str]] = [issue.to_dict() for issue in self.issues]
        return {
            "valid": self.valid,
            "issues": issues,
            "stats": self.stats.to_dict(),
        }


EMPTY_REPORT = ValidationReport(valid=True)
