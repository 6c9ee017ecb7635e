"""``right-st rightscript validate PATH...`` — check metadata and attachments.

Parses every file's metadata block and fingerprints each declared
attachment. Missing metadata counts as an error here.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.pretty import Pretty

from rightst.cli.context import CliContext
from rightst.cli.render import ScriptRenderer
from rightst.core.errors import RightstError
from rightst.core.paths import walk_paths
from rightst.core.pipeline import plan_script

console = Console()


def validate_cmd(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(
        ..., exists=True, help="Path to script file or directory containing script files."
    ),
) -> None:
    """Validate RightScript YAML metadata comments in a file or files."""
    state: CliContext = ctx.obj
    renderer = ScriptRenderer(console)
    error_encountered = False

    for path in walk_paths(paths):
        try:
            plan = plan_script(path)
        except RightstError as exc:
            error_encountered = True
            console.print(f"[bold red]{escape(str(path))}:[/bold red] {escape(str(exc))}")
            continue

        if state.config.debug:
            console.print(Pretty(plan.metadata.model_dump()))
        console.print(f"{escape(str(path))} - [green]valid metadata[/green]")
        renderer.print_fingerprints(plan.attachments)

    if error_encountered:
        raise typer.Exit(code=1)
