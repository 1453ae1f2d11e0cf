"""issuelens CLI - JSON-first command-line interface.

All commands emit structured JSON envelopes to stdout for reliable parsing.
"""

from issuelens.cli.config import CLIContext, create_context
from issuelens.cli.logging import cli_command, get_cli_logger, get_request_id
from issuelens.cli.main import cli
from issuelens.cli.output import emit, emit_error, emit_success
from issuelens.cli.registry import get_context, set_context

__all__ = [
    # Entry point
    "cli",
    # Context
    "CLIContext",
    "create_context",
    "get_context",
    "set_context",
    # Output
    "emit",
    "emit_error",
    "emit_success",
    # Logging
    "cli_command",
    "get_cli_logger",
    "get_request_id",
]
