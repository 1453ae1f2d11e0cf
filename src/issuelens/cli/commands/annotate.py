"""Annotate command for the issuelens CLI.

Overlays a validator report onto a JSON document and emits the annotated
tree together with the filtered, sorted issue list.
"""

from typing import List, Optional

import click

from issuelens.cli.commands.common import (
    load_document_or_exit,
    load_report_or_exit,
    resolve_collaborator_or_exit,
)
from issuelens.cli.logging import cli_command, get_cli_logger
from issuelens.cli.output import emit_error, emit_success
from issuelens.cli.registry import get_context
from issuelens.core.collaborators import VALIDATION_MODES, ValidatorError, run_validation
from issuelens.core.inspection import inspect_document
from issuelens.core.issues import ValidationReport
from issuelens.core.rendering import RenderOptions, render_tree

logger = get_cli_logger()

SEVERITY_CHOICES = ["all", "error", "warning", "info"]


@click.command("annotate")
@click.argument("document", type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--report",
    "report_path",
    type=click.Path(dir_okay=False, allow_dash=True),
    help="Validator report JSON ({valid, issues, stats} or a list of issues).",
)
@click.option(
    "--validator",
    "validator_ref",
    help="Run this validator (module:function) instead of reading a report.",
)
@click.option(
    "--mode",
    type=click.Choice(list(VALIDATION_MODES)),
    help="Validation mode passed to the validator.",
)
@click.option(
    "--severity",
    type=click.Choice(SEVERITY_CHOICES),
    help="Only list issues of this severity.",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    help="Do not descend into containers nested this deep.",
)
@click.option("--text", "as_text", is_flag=True, help="Include a plain-text outline.")
@click.pass_context
@cli_command("annotate")
def annotate_cmd(
    ctx: click.Context,
    document: str,
    report_path: Optional[str],
    validator_ref: Optional[str],
    mode: Optional[str],
    severity: Optional[str],
    max_depth: Optional[int],
    as_text: bool,
) -> None:
    """Annotate DOCUMENT with issues from a report or a validator.

    DOCUMENT is a JSON file path, or - for stdin.
    """
    cli_ctx = get_context(ctx)

    if report_path and validator_ref:
        emit_error(
            "Use either --report or --validator, not both",
            code="VALIDATION_ERROR",
            error_type="validation",
        )

    doc = load_document_or_exit(document)

    warnings: List[str] = []
    report: Optional[ValidationReport] = None
    if report_path:
        report = load_report_or_exit(report_path)
    elif validator_ref or cli_ctx.config.validation.validator:
        validator = resolve_collaborator_or_exit(
            cli_ctx.validator_ref(validator_ref), "validator"
        )
        try:
            outcome = run_validation(doc, validator, cli_ctx.validation_mode(mode))
        except ValidatorError as exc:
            emit_error(
                f"Validation failed: {exc}",
                code="VALIDATOR_FAILED",
                error_type="collaborator",
            )
        report = outcome.report
        if outcome.warning:
            warnings.append(outcome.warning)

    inspection = inspect_document(
        doc,
        report,
        severity_filter=cli_ctx.severity_filter(severity),
        max_depth=cli_ctx.max_depth(max_depth),
    )

    data = inspection.to_dict()
    if as_text and inspection.tree is not None:
        data["outline"] = render_tree(inspection.tree, RenderOptions()).text

    logger.debug(
        "Annotated document",
        issues=len(inspection.report.issues),
        listed=len(inspection.issues),
    )
    emit_success(data, warnings=warnings or None)
