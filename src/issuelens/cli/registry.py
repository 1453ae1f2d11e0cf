"""Command registry for the issuelens CLI.

Centralized registration of all command groups.
"""

from typing import Optional

import click

from issuelens.cli.config import CLIContext

# Module-level storage for CLI context (for testing)
_cli_context: Optional[CLIContext] = None


def set_context(ctx: CLIContext) -> None:
    """Set the CLI context at module level.

    Primarily used for testing when not using Click's context.

    Args:
        ctx: The CLIContext to store.
    """
    global _cli_context
    _cli_context = ctx


def get_context(ctx: Optional[click.Context] = None) -> CLIContext:
    """Get CLI context from Click context or module-level storage.

    Args:
        ctx: Optional Click context with cli_context stored in obj.
             If None, returns module-level context.

    Returns:
        The CLIContext instance.

    Raises:
        RuntimeError: If no context is available.
    """
    if ctx is not None and ctx.obj and "cli_context" in ctx.obj:
        return ctx.obj["cli_context"]

    if _cli_context is not None:
        return _cli_context

    raise RuntimeError("No CLI context available. Call set_context() first.")


def register_all_commands(cli: click.Group) -> None:
    """Register all command groups with the CLI.

    Command groups are lazily imported to avoid circular dependencies.

    Args:
        cli: The main Click group to register commands with.
    """
    from issuelens.cli.commands import (
        annotate_cmd,
        convert_cmd,
        issues_group,
        paths_group,
    )

    cli.add_command(annotate_cmd)
    cli.add_command(convert_cmd)
    cli.add_command(issues_group)
    cli.add_command(paths_group)

    @cli.command("version")
    @click.pass_context
    def version(ctx: click.Context) -> None:
        """Show CLI version information."""
        from issuelens.cli.output import emit_success

        cli_ctx = get_context(ctx)
        emit_success(
            {
                "name": "issuelens",
                "version": cli_ctx.config.server_version,
                "json_only": True,
                "max_depth": cli_ctx.config.annotation.max_depth,
            }
        )
