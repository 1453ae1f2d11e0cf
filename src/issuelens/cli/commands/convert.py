"""Convert command for the issuelens CLI.

Runs the configured external converter and emits the converted document
with before/after text for diffing.
"""

from typing import Optional

import click

from issuelens.cli.commands.common import (
    load_document_or_exit,
    resolve_collaborator_or_exit,
)
from issuelens.cli.logging import cli_command
from issuelens.cli.output import emit_error, emit_success
from issuelens.cli.registry import get_context
from issuelens.core.collaborators import CONVERSION_MODE_IDS, ConversionError, run_conversion


@click.command("convert")
@click.argument("document", type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--mode",
    type=click.Choice(list(CONVERSION_MODE_IDS)),
    required=True,
    help="Conversion direction.",
)
@click.option("--converter", "converter_ref", help="Converter to run (module:function).")
@click.pass_context
@cli_command("convert")
def convert_cmd(
    ctx: click.Context,
    document: str,
    mode: str,
    converter_ref: Optional[str],
) -> None:
    """Convert DOCUMENT between document versions.

    DOCUMENT is a JSON file path, or - for stdin.
    """
    cli_ctx = get_context(ctx)
    converter = resolve_collaborator_or_exit(cli_ctx.converter_ref(converter_ref), "converter")
    doc = load_document_or_exit(document)

    try:
        result = run_conversion(doc, mode, converter)
    except ConversionError as exc:
        emit_error(
            f"Conversion failed: {exc}",
            code="CONVERSION_FAILED",
            error_type="collaborator",
            details={"mode": mode},
        )

    emit_success(result.to_dict())
