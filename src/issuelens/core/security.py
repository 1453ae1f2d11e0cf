"""
Input size limits for issuelens.

Documents and reports arrive from outside the process (files, stdin, MCP
tool arguments). These limits bound the work a single request can cause.
"""

import logging
from typing import Final, Optional, Union

logger = logging.getLogger(__name__)

# =============================================================================
# Input Size Limits
# =============================================================================

MAX_INPUT_SIZE: Final[int] = 20_000_000
"""Maximum raw document or report size in bytes (20MB).

Large IIIF collections run to several megabytes; anything beyond this is
rejected before JSON parsing.
"""

MAX_ISSUE_COUNT: Final[int] = 100_000
"""Maximum number of issues accepted in one report."""

MAX_NESTED_DEPTH: Final[int] = 500
"""Default nesting bound for tree annotation.

Containers nested deeper than this are not descended; the annotator emits
a truncated marker node instead.
"""


class InputTooLargeError(ValueError):
    """Raised when raw input exceeds a configured size limit."""

    def __init__(self, size: int, limit: int, what: str = "input"):
        self.size = size
        self.limit = limit
        super().__init__(f"{what} exceeds maximum size of {limit} bytes (got {size})")


def check_input_size(
    raw: Union[str, bytes],
    max_size: Optional[int] = None,
    what: str = "input",
) -> None:
    """
    Reject oversized raw input.

    Args:
        raw: Raw text or bytes
        max_size: Limit in bytes (default: MAX_INPUT_SIZE)
        what: Label used in the error message

    Raises:
        InputTooLargeError: If the input is larger than the limit
    """
    limit = MAX_INPUT_SIZE if max_size is None else max_size
    size = len(raw.encode("utf-8")) if isinstance(raw, str) else len(raw)
    if size > limit:
        logger.warning("Rejected %s of %d bytes (limit %d)", what, size, limit)
        raise InputTooLargeError(size, limit, what)
