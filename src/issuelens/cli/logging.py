"""Structured logging hooks for CLI commands.

Wraps each command in a request context so every log line it emits
carries the same correlation ID, and logs command start/end with timing.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from issuelens.core.context import (
    generate_correlation_id,
    get_correlation_id,
    sync_request_context,
)

__all__ = [
    "generate_request_id",
    "get_request_id",
    "cli_command",
    "get_cli_logger",
    "CLILogger",
]

T = TypeVar("T")


def generate_request_id() -> str:
    """Generate a unique request ID for CLI command tracking."""
    return generate_correlation_id(prefix="cli")


def get_request_id() -> str:
    """Get the current request ID, or empty string outside a command."""
    return get_correlation_id()


class CLILogger:
    """Structured logger for CLI commands.

    Passes keyword context through ``extra`` so the structured formatter
    can emit it alongside the message.
    """

    def __init__(self, name: str = "issuelens.cli"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, **extra: Any) -> None:
        self._logger.log(level, message, extra={"cli_context": extra})

    def debug(self, message: str, **extra: Any) -> None:
        self._log(logging.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self._log(logging.INFO, message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        self._log(logging.WARNING, message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self._log(logging.ERROR, message, **extra)


# Global CLI logger
_cli_logger = CLILogger()


def get_cli_logger() -> CLILogger:
    """Get the global CLI logger."""
    return _cli_logger


def cli_command(
    command_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for CLI commands with request correlation.

    Automatically:
    - Generates a request ID for correlation
    - Logs command start/end with duration

    Args:
        command_name: Override command name (defaults to function name).

    Example:
        >>> @cli_command("annotate")
        ... def annotate_cmd(ctx, document):
        ...     ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = command_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            with sync_request_context(correlation_id=generate_request_id()):
                start = time.perf_counter()
                success = True
                error_msg = None

                _cli_logger.debug(f"CLI command started: {name}", command=name)

                try:
                    return func(*args, **kwargs)
                except SystemExit as e:
                    # emit_error exits non-zero after writing the envelope
                    if e.code not in (0, None):
                        success = False
                        error_msg = f"exit code {e.code}"
                    raise
                except Exception as e:
                    success = False
                    error_msg = str(e)
                    raise
                finally:
                    duration_ms = (time.perf_counter() - start) * 1000
                    _cli_logger.debug(
                        f"CLI command completed: {name}",
                        command=name,
                        success=success,
                        duration_ms=round(duration_ms, 2),
                        error=error_msg,
                    )

        return wrapper

    return decorator
