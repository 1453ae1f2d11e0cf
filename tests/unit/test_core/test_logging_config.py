"""
Unit tests for issuelens.core.logging_config and issuelens.core.context.
"""

import io
import json
import logging

import pytest

from issuelens.core.context import (
    generate_correlation_id,
    get_correlation_id,
    get_start_time,
    sync_request_context,
)
from issuelens.core.logging_config import ROOT_LOGGER, configure_logging, get_logger


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestRequestContext:
    def test_generate_correlation_id(self):
        corr_id = generate_correlation_id("cli")
        assert corr_id.startswith("cli_")
        assert len(corr_id) == len("cli_") + 12

    def test_context_sets_and_resets(self):
        assert get_correlation_id() == ""
        with sync_request_context(correlation_id="req_1") as ctx:
            assert get_correlation_id() == "req_1"
            assert get_start_time() == ctx.start_time
            assert ctx.to_dict()["correlation_id"] == "req_1"
        assert get_correlation_id() == ""
        assert get_start_time() == 0.0


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    def test_structured_output(self):
        stream = io.StringIO()
        configure_logging(level="DEBUG", format="structured", stream=stream)

        with sync_request_context(correlation_id="req_log"):
            get_logger("core.index").debug("Built path index", extra={"paths": 3})

        entry = json.loads(stream.getvalue().strip())
        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "issuelens.core.index"
        assert entry["message"] == "Built path index"
        assert entry["correlation_id"] == "req_log"
        assert entry["extra"] == {"paths": 3}

    def test_human_output(self):
        stream = io.StringIO()
        configure_logging(level=logging.INFO, format="human", stream=stream)
        logging.getLogger("issuelens.cli").info("hello")
        assert "[INFO] cli: hello" in stream.getvalue()

    def test_level_filters(self):
        stream = io.StringIO()
        configure_logging(level="warning", format="human", stream=stream)
        logging.getLogger("issuelens.core").info("hidden")
        assert stream.getvalue() == ""

    def test_reconfigure_does_not_duplicate(self):
        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream)
        configure_logging(level="INFO", stream=stream)
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        logger = configure_logging(level="chatty", stream=io.StringIO())
        assert logger.level == logging.INFO

    def test_get_logger_prefixes_namespace(self):
        assert get_logger("x").name == "issuelens.x"
        assert get_logger("issuelens.core").name == "issuelens.core"
