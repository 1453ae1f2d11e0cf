"""
Unit tests for issuelens.core.collaborators module.

Tests the converter and validator seams with stand-in callables.
"""

import pytest

from issuelens.core.collaborators import (
    CONVERSION_MODE_IDS,
    ConversionError,
    ValidatorError,
    load_collaborator,
    run_conversion,
    run_validation,
)
from issuelens.core.issues import Severity, ValidationReport


def upgrade(document, mode):
    return {**document, "converted_by": mode}


def failing_converter(document, mode):
    raise RuntimeError("unsupported context")


def validator_with_errors(document, options):
    return {
        "valid": False,
        "issues": [{"path": "$.id", "severity": "error", "code": "E_ID", "message": "bad id"}],
        "stats": {"errors": 1, "warnings": 0, "info": 0},
    }


class PartialFailure(Exception):
    def __init__(self, message, report):
        super().__init__(message)
        self.report = report


class TestRunConversion:
    def test_success(self):
        result = run_conversion({"id": "a"}, "2to3", upgrade)
        assert result.document == {"id": "a", "converted_by": "2to3"}
        assert result.before == '{\n  "id": "a"\n}'
        assert '"converted_by": "2to3"' in result.after
        assert result.to_dict()["mode"] == "2to3"

    def test_modes(self):
        assert CONVERSION_MODE_IDS == ("2to3", "3to4", "4to3")

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown conversion mode"):
            run_conversion({}, "1to2", upgrade)

    def test_converter_failure_passes_message_through(self):
        with pytest.raises(ConversionError, match="unsupported context"):
            run_conversion({}, "3to4", failing_converter)

    def test_empty_failure_message(self):
        def silent(document, mode):
            raise RuntimeError()

        with pytest.raises(ConversionError, match="Unknown conversion error"):
            run_conversion({}, "4to3", silent)

    def test_non_json_result(self):
        with pytest.raises(ConversionError, match="non-JSON document") as exc_info:
            run_conversion({}, "2to3", lambda document, mode: {"ids": {1, 2}})
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_self_referencing_result(self):
        def looping(document, mode):
            converted = dict(document)
            converted["self"] = converted
            return converted

        with pytest.raises(ConversionError, match="non-JSON document"):
            run_conversion({"id": "a"}, "3to4", looping)


class TestRunValidation:
    def test_report_is_parsed(self):
        outcome = run_validation({"id": 1}, validator_with_errors)
        assert isinstance(outcome.report, ValidationReport)
        assert outcome.report.issues[0].severity is Severity.ERROR
        assert outcome.partial is False

    def test_mode_is_passed(self):
        seen = {}

        def validator(document, options):
            seen.update(options)
            return []

        run_validation({}, validator, "strict")
        assert seen == {"mode": "strict"}

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            run_validation({}, validator_with_errors, "lenient")

    def test_partial_report_on_failure(self):
        def validator(document, options):
            raise PartialFailure(
                "schema fetch failed",
                [{"path": "$", "severity": "warning", "code": "W"}],
            )

        outcome = run_validation({}, validator)
        assert outcome.partial is True
        assert outcome.warning == "schema fetch failed"
        assert len(outcome.report.issues) == 1

    def test_failure_without_report(self):
        def validator(document, options):
            raise RuntimeError("boom")

        with pytest.raises(ValidatorError, match="boom"):
            run_validation({}, validator)

    def test_unusable_result(self):
        with pytest.raises(ValidatorError, match="unusable report"):
            run_validation({}, lambda document, options: 42)


class TestLoadCollaborator:
    def test_resolves_reference(self):
        assert load_collaborator("json:dumps") is __import__("json").dumps

    def test_dotted_attribute(self):
        func = load_collaborator("os:path.join")
        assert func("a", "b").endswith("b")

    @pytest.mark.parametrize("reference", ["json", ":dumps", "json:"])
    def test_malformed_reference(self, reference):
        with pytest.raises(ValueError, match="module:attribute"):
            load_collaborator(reference)

    def test_missing_module(self):
        with pytest.raises(ValueError, match="Cannot import"):
            load_collaborator("issuelens_no_such_module:run")

    def test_missing_attribute(self):
        with pytest.raises(ValueError, match="has no attribute"):
            load_collaborator("json:no_such_function")

    def test_not_callable(self):
        with pytest.raises(ValueError, match="not callable"):
            load_collaborator("json:__name__")
