"""
Root pytest configuration and shared fixtures.

Provides sample documents, issues and reports plus helpers for reading
tool results.
"""

import json
from typing import Any, Dict, List, Union

import pytest
from mcp.types import TextContent

from issuelens.config import ServerConfig, set_config
from issuelens.core.issues import Issue, Severity, ValidationReport

# Response contract version from responses.py
RESPONSE_CONTRACT_VERSION = "response-v2"


def extract_response_dict(result: Union[Dict[str, Any], TextContent]) -> Dict[str, Any]:
    """Extract dict from tool result, handling both dict and TextContent.

    Tools wrapped with canonical_tool return TextContent with minified JSON.
    """
    if isinstance(result, dict):
        return result
    if isinstance(result, TextContent):
        return json.loads(result.text)
    raise TypeError(f"Expected dict or TextContent, got {type(result).__name__}")


@pytest.fixture(autouse=True)
def quiet_config():
    """Install a fresh global config with logging kept quiet."""
    config = ServerConfig(log_level="CRITICAL")
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """Small manifest-like document."""
    return {
        "type": "Manifest",
        "label": {"en": ["Example"]},
        "items": [
            {"id": "canvas-1", "type": "Canvas", "height": 100},
            {"id": "canvas-2", "type": "Canvas", "width": None},
        ],
    }


@pytest.fixture
def sample_issues() -> List[Issue]:
    """Issues against sample_document, in validator order."""
    return [
        Issue("$.items[1].width", Severity.ERROR, "E_WIDTH", "width must be an integer"),
        Issue("$.items[0]", Severity.WARNING, "W_NO_WIDTH", "canvas has no width"),
        Issue("$.label", Severity.INFO, "I_LANG", "label has one language"),
        Issue("$.items[1]", Severity.WARNING, "W_NO_HEIGHT", "canvas has no height"),
        Issue("$.items[1]", Severity.ERROR, "E_DIMS", "canvas dimensions incomplete"),
    ]


@pytest.fixture
def sample_report(sample_issues) -> ValidationReport:
    return ValidationReport.from_issues(sample_issues)


@pytest.fixture
def sample_report_dict(sample_report) -> Dict[str, Any]:
    return sample_report.to_dict()


@pytest.fixture
def end_to_end_document() -> Dict[str, Any]:
    return {"items": [{"id": "x"}]}


@pytest.fixture
def end_to_end_issues() -> List[Issue]:
    return [
        Issue("$.items[0].id", Severity.WARNING, "W1", "m1"),
        Issue("$.items[0]", Severity.ERROR, "E1", "m2"),
    ]
