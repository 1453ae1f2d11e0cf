"""
Unit tests for issuelens.core.inspection module.
"""

import json

from issuelens.core.inspection import inspect_document
from issuelens.core.issues import Issue, Severity, ValidationReport


class TestInspectDocument:
    """Tests for inspect_document function."""

    def test_document_and_report(self, sample_document, sample_report):
        inspection = inspect_document(sample_document, sample_report)

        assert inspection.document_type == "Manifest"
        assert inspection.tree.descendant_count == 5
        assert inspection.index.total == 5
        assert inspection.issues[0].code == "E_DIMS"

    def test_no_report_means_no_issues(self, sample_document):
        inspection = inspect_document(sample_document)
        assert inspection.issues == ()
        assert inspection.tree.descendant_count == 0
        assert inspection.report.valid is True

    def test_no_document(self, sample_report):
        inspection = inspect_document(None, sample_report)
        assert inspection.tree is None
        assert len(inspection.issues) == 5
        assert inspection.to_dict()["nodes"] is None

    def test_severity_filter(self, sample_document, sample_report):
        inspection = inspect_document(sample_document, sample_report, severity_filter="warning")
        assert {i.severity for i in inspection.issues} == {Severity.WARNING}
        # the tree keeps every issue
        assert inspection.tree.descendant_count == 5

    def test_max_depth(self, sample_document):
        inspection = inspect_document(sample_document, max_depth=1)
        assert inspection.tree.find("$.items").truncated is True

    def test_to_dict(self, sample_document, sample_report):
        data = inspect_document(sample_document, sample_report, severity_filter="error").to_dict()

        assert data["document_type"] == "Manifest"
        assert data["valid"] is False
        assert data["stats"] == {"errors": 2, "warnings": 2, "info": 1}
        assert data["severity_filter"] == "error"
        assert [i["code"] for i in data["issues"]] == ["E_DIMS", "E_WIDTH"]
        assert data["issue_total"] == 5
        assert data["malformed_paths"] == []
        assert data["nodes"][0]["path"] == "$"
        assert data["nodes"][0]["descendant_count"] == 5
        json.dumps(data)

    def test_malformed_paths_listed(self):
        report = ValidationReport.from_issues(
            [
                Issue("items[0]", Severity.ERROR, "E", ""),
                Issue("items[0]", Severity.INFO, "I", ""),
            ]
        )
        data = inspect_document({"items": [1]}, report).to_dict()
        assert data["malformed_paths"] == ["items[0]"]
        assert data["issue_total"] == 0
