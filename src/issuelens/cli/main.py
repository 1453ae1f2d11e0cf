"""issuelens CLI entry point.

JSON-only output: every command writes one response envelope to stdout.
"""

import click

from issuelens.cli.config import create_context
from issuelens.cli.registry import register_all_commands


@click.group()
@click.option(
    "--config-file",
    envvar="ISSUELENS_CONFIG_FILE",
    type=click.Path(exists=False, dir_okay=False),
    help="Path to an issuelens TOML config file",
)
@click.pass_context
def cli(ctx: click.Context, config_file: str | None) -> None:
    """issuelens - overlay validator issues onto JSON documents.

    All commands output JSON for reliable parsing by tools.
    """
    ctx.ensure_object(dict)
    cli_ctx = create_context(config_file=config_file)
    cli_ctx.config.setup_logging()
    ctx.obj["cli_context"] = cli_ctx


# Register all command groups
register_all_commands(cli)


if __name__ == "__main__":
    cli()
