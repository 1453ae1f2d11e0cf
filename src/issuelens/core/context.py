"""Request context for log correlation.

Every CLI command and MCP tool call runs inside a request context so that
log lines emitted while indexing or annotating can be tied back to the
request that caused them.

Usage:
    from issuelens.core.context import sync_request_context, get_correlation_id

    with sync_request_context() as ctx:
        print(ctx.correlation_id)  # e.g., "req_a1b2c3d4e5f6"
"""

from __future__ import annotations

import secrets
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

__all__ = [
    "correlation_id_var",
    "start_time_var",
    "RequestContext",
    "generate_correlation_id",
    "sync_request_context",
    "get_correlation_id",
    "get_start_time",
]

# -----------------------------------------------------------------------------
# Context Variables
# -----------------------------------------------------------------------------

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")
"""Correlation ID of the current request."""

start_time_var: ContextVar[float] = ContextVar("start_time", default=0.0)
"""Unix timestamp at which the current request started."""


def generate_correlation_id(prefix: str = "req") -> str:
    """Generate a unique correlation ID with optional prefix.

    Format: {prefix}_{12_hex_chars}

    Args:
        prefix: ID prefix (default: "req")

    Returns:
        Unique correlation ID string
    """
    return f"{prefix}_{secrets.token_hex(6)}"


@dataclass
class RequestContext:
    """Snapshot of the current request context."""

    correlation_id: str = ""
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_ms(self) -> float:
        if self.start_time <= 0:
            return 0.0
        return (time.time() - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_id": self.correlation_id,
            "start_time": self.start_time,
            "elapsed_ms": round(self.elapsed_ms, 2),
        }


@contextmanager
def sync_request_context(
    *,
    correlation_id: Optional[str] = None,
    prefix: str = "req",
) -> Generator[RequestContext, None, None]:
    """Set the request context for the duration of the with block.

    Args:
        correlation_id: Request ID (auto-generated if None)
        prefix: Prefix for generated IDs

    Yields:
        RequestContext snapshot
    """
    corr_id = correlation_id or generate_correlation_id(prefix)
    start = time.time()

    token_corr = correlation_id_var.set(corr_id)
    token_start = start_time_var.set(start)
    try:
        yield RequestContext(correlation_id=corr_id, start_time=start)
    finally:
        correlation_id_var.reset(token_corr)
        start_time_var.reset(token_start)


def get_correlation_id() -> str:
    """Current correlation ID, or empty string outside a request."""
    return correlation_id_var.get()


def get_start_time() -> float:
    """Current request start time, or 0.0 outside a request."""
    return start_time_var.get()
