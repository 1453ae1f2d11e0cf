"""
Unit tests for issuelens.core.issues module.

Tests Issue and ValidationReport parsing from validator payloads.
"""

import pytest

from issuelens.core.issues import (
    EMPTY_REPORT,
    Issue,
    ReportFormatError,
    Severity,
    ValidationReport,
    ValidationStats,
)


class TestSeverity:
    def test_parse_is_case_insensitive(self):
        assert Severity.parse("WARNING") is Severity.WARNING

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Severity.parse("critical")

    def test_parse_rejects_non_strings(self):
        with pytest.raises(ValueError):
            Severity.parse(3)  # type: ignore[arg-type]


class TestIssue:
    """Tests for Issue.from_dict and to_dict."""

    def test_from_dict(self):
        issue = Issue.from_dict(
            {"path": "$.a", "severity": "error", "code": "E1", "message": "bad"}
        )
        assert issue == Issue("$.a", Severity.ERROR, "E1", "bad")

    def test_message_defaults_to_empty(self):
        issue = Issue.from_dict({"path": "$", "severity": "info", "code": "I"})
        assert issue.message == ""

    def test_missing_fields(self):
        with pytest.raises(ReportFormatError, match="severity, code"):
            Issue.from_dict({"path": "$"})

    def test_bad_severity(self):
        with pytest.raises(ReportFormatError):
            Issue.from_dict({"path": "$", "severity": "fatal", "code": "X"})

    def test_non_object_entry(self):
        with pytest.raises(ReportFormatError, match="must be objects"):
            Issue.from_dict(["$", "error"])  # type: ignore[arg-type]

    def test_to_dict(self):
        assert Issue("$", Severity.INFO, "I", "m").to_dict() == {
            "path": "$",
            "severity": "info",
            "code": "I",
            "message": "m",
        }

    def test_issues_are_hashable(self):
        issue = Issue("$", Severity.INFO, "I", "m")
        assert {issue, Issue("$", Severity.INFO, "I", "m")} == {issue}


class TestValidationReport:
    """Tests for ValidationReport.from_dict."""

    def test_full_report(self):
        report = ValidationReport.from_dict(
            {
                "valid": False,
                "issues": [{"path": "$.a", "severity": "error", "code": "E"}],
                "stats": {"errors": 1, "warnings": 0, "info": 0},
            }
        )
        assert report.valid is False
        assert len(report.issues) == 1
        assert report.stats == ValidationStats(errors=1)

    def test_bare_issue_list(self):
        report = ValidationReport.from_dict(
            [
                {"path": "$.a", "severity": "warning", "code": "W"},
                {"path": "$.b", "severity": "info", "code": "I"},
            ]
        )
        assert report.valid is True
        assert report.stats == ValidationStats(warnings=1, info=1)

    def test_stats_are_taken_verbatim(self):
        report = ValidationReport.from_dict(
            {"valid": True, "issues": [], "stats": {"errors": 0, "warnings": 7, "info": 0}}
        )
        assert report.stats.warnings == 7

    def test_missing_valid_means_no_errors(self):
        report = ValidationReport.from_dict(
            {"issues": [{"path": "$", "severity": "error", "code": "E"}]}
        )
        assert report.valid is False

    def test_empty_object(self):
        report = ValidationReport.from_dict({})
        assert report.valid is True
        assert report.issues == ()

    def test_issues_must_be_list(self):
        with pytest.raises(ReportFormatError, match="must be a list"):
            ValidationReport.from_dict({"issues": {"path": "$"}})

    def test_scalar_payload(self):
        with pytest.raises(ReportFormatError):
            ValidationReport.from_dict("nope")

    def test_passthrough(self, sample_report):
        assert ValidationReport.from_dict(sample_report) is sample_report

    def test_to_dict_round_trip(self, sample_report):
        assert ValidationReport.from_dict(sample_report.to_dict()) == sample_report

    def test_empty_report(self):
        assert EMPTY_REPORT.valid is True
        assert EMPTY_REPORT.stats.total == 0
