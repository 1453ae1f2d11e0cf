"""Naming helpers for MCP tool registration."""

from __future__ import annotations

import functools
import json
import logging
import time
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from issuelens.core.context import sync_request_context

logger = logging.getLogger(__name__)


def _minify_response(result: dict[str, Any]) -> TextContent:
    """Convert dict to TextContent with minified JSON."""
    return TextContent(
        type="text",
        text=json.dumps(result, separators=(",", ":"), default=str),
    )


def canonical_tool(
    mcp: FastMCP,
    *,
    canonical_name: str,
    **tool_kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that registers a tool under its canonical name.

    The wrapped tool runs inside a request context, its dict result is
    returned as minified JSON ``TextContent``, and its duration is logged.

    Args:
        mcp: FastMCP instance
        canonical_name: The canonical name for the tool
        **tool_kwargs: Additional kwargs passed to mcp.tool()

    Returns:
        Decorated function registered as an MCP tool
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with sync_request_context(prefix="tool"):
                start_time = time.perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception("Tool %s raised", canonical_name)
                    raise
                finally:
                    logger.debug(
                        "Tool %s finished in %.2fms",
                        canonical_name,
                        (time.perf_counter() - start_time) * 1000,
                    )
                if isinstance(result, dict):
                    return _minify_response(result)
                return result

        return mcp.tool(name=canonical_name, **tool_kwargs)(wrapper)

    return decorator
