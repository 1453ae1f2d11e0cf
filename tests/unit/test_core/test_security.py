"""
Unit tests for issuelens.core.security module.
"""

import pytest

from issuelens.core.security import (
    MAX_INPUT_SIZE,
    InputTooLargeError,
    check_input_size,
)


class TestCheckInputSize:
    def test_within_limit(self):
        check_input_size("abc", 3)

    def test_over_limit(self):
        with pytest.raises(InputTooLargeError, match="report exceeds maximum size of 2 bytes"):
            check_input_size("abc", 2, what="report")

    def test_counts_utf8_bytes(self):
        with pytest.raises(InputTooLargeError):
            check_input_size("éé", 3)

    def test_default_limit(self):
        check_input_size(b"x" * 10)
        assert MAX_INPUT_SIZE == 20_000_000

    def test_is_value_error(self):
        assert issubclass(InputTooLargeError, ValueError)
