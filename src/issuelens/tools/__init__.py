"""MCP tool registration surface."""

from issuelens.tools.annotation import register_annotation_tools

__all__ = [
    "register_annotation_tools",
]
