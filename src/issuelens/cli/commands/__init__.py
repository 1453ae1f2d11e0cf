"""CLI commands.

The CLI is organized into top-level commands (`annotate`, `convert`) and
domain groups (`issues`, `paths`).
"""

from issuelens.cli.commands.annotate import annotate_cmd
from issuelens.cli.commands.convert import convert_cmd
from issuelens.cli.commands.issues import issues_group
from issuelens.cli.commands.paths import paths_group

__all__ = [
    "annotate_cmd",
    "convert_cmd",
    "issues_group",
    "paths_group",
]
