"""``right-st rightscript list FILTER`` — list remote scripts by name."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from rightst.cli.context import CliContext
from rightst.cli.render import ScriptRenderer
from rightst.core.errors import RightstError

console = Console()


def list_cmd(
    ctx: typer.Context,
    name_filter: str = typer.Argument(..., metavar="FILTER", help="Filter by name."),
) -> None:
    """List RightScripts whose name matches FILTER (partial match)."""
    state: CliContext = ctx.obj
    console.print(f"Listing {escape(name_filter)}:")
    try:
        scripts = state.get_gateway().list_scripts(name_filter)
    except RightstError as exc:
        console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    ScriptRenderer(console).print_scripts(scripts)
