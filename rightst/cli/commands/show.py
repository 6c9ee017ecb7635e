"""``right-st rightscript show NAME_OR_HREF`` — show a script and its attachments."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from rightst.cli.context import CliContext
from rightst.cli.render import ScriptRenderer
from rightst.core.errors import RightstError
from rightst.core.resolver import resolve_reference
from rightst.core.snapshot import take_snapshot

console = Console()


def show_cmd(
    ctx: typer.Context,
    reference: str = typer.Argument(
        ..., metavar="NAME_OR_HREF", help="Script name, id, or HREF."
    ),
) -> None:
    """Show a single RightScript and its attachments (id, md5, name)."""
    state: CliContext = ctx.obj
    try:
        gateway = state.get_gateway()
        handle = resolve_reference(gateway, reference)
        script = gateway.get_script(handle)
        snapshot = take_snapshot(gateway, handle)
    except RightstError as exc:
        console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    ScriptRenderer(console).print_script(script, snapshot.attachments)
