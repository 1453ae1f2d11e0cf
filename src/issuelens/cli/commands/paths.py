"""Path inspection commands for the issuelens CLI."""

from typing import Tuple

import click

from issuelens.cli.logging import cli_command
from issuelens.cli.output import emit_success
from issuelens.core.paths import expand_path


@click.group("paths")
def paths_group() -> None:
    """Issue path commands."""
    pass


@paths_group.command("expand")
@click.argument("paths", nargs=-1, required=True)
@cli_command("paths-expand")
def paths_expand_cmd(paths: Tuple[str, ...]) -> None:
    """Expand each PATH into its ancestor chain (root first)."""
    results = []
    for path in paths:
        ancestors = expand_path(path)
        results.append(
            {
                "path": path,
                "well_formed": bool(ancestors),
                "ancestors": list(ancestors),
            }
        )
    emit_success({"paths": results})
