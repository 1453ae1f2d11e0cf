"""Issue list commands for the issuelens CLI."""

from typing import Optional

import click

from issuelens.cli.commands.annotate import SEVERITY_CHOICES
from issuelens.cli.commands.common import load_report_or_exit
from issuelens.cli.logging import cli_command
from issuelens.cli.output import emit_success
from issuelens.cli.registry import get_context
from issuelens.core.index import build_index
from issuelens.core.presentation import count_by_severity, present


@click.group("issues")
def issues_group() -> None:
    """Issue listing and indexing commands."""
    pass


@issues_group.command("list")
@click.argument("report_path", type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--severity",
    type=click.Choice(SEVERITY_CHOICES),
    help="Only list issues of this severity.",
)
@click.pass_context
@cli_command("issues-list")
def issues_list_cmd(ctx: click.Context, report_path: str, severity: Optional[str]) -> None:
    """List issues from a report, strongest severity first.

    REPORT_PATH is a JSON report file, or - for stdin.
    """
    cli_ctx = get_context(ctx)
    report = load_report_or_exit(report_path)
    selected = cli_ctx.severity_filter(severity)

    issues = present(report.issues, selected)
    emit_success(
        {
            "valid": report.valid,
            "stats": report.stats.to_dict(),
            "severity_filter": selected,
            "count": len(issues),
            "counts": count_by_severity(issues).to_dict(),
            "issues": [issue.to_dict() for issue in issues],
        }
    )


@issues_group.command("index")
@click.argument("report_path", type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_context
@cli_command("issues-index")
def issues_index_cmd(ctx: click.Context, report_path: str) -> None:
    """Show per-path exact issues and roll-up counts for a report.

    REPORT_PATH is a JSON report file, or - for stdin.
    """
    report = load_report_or_exit(report_path)
    index = build_index(report.issues)

    warnings = None
    if index.malformed:
        warnings = [
            f"{len(index.malformed)} issue(s) have paths not starting with '$' "
            "and are excluded from roll-up counts"
        ]

    emit_success({"total": index.total, **index.to_dict()}, warnings=warnings)
