"""``right-st rightscript download NAME_OR_HREF [PATH]`` — save a script's source."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rightst.cli.context import CliContext
from rightst.core.errors import RightstError
from rightst.core.resolver import resolve_reference

console = Console()


def download_cmd(
    ctx: typer.Context,
    reference: str = typer.Argument(
        ..., metavar="NAME_OR_HREF", help="Script name, id, or HREF."
    ),
    path: Path = typer.Argument(
        None, help="Download location. Defaults to the script name."
    ),
) -> None:
    """Download a RightScript's source to a file."""
    state: CliContext = ctx.obj
    try:
        gateway = state.get_gateway()
        handle = resolve_reference(gateway, reference)
        script = gateway.get_script(handle)
        source = gateway.fetch_source(handle)
    except RightstError as exc:
        console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    target = path or Path(script.name)
    console.print(f"Downloading '{escape(script.name)}' to {target}")
    try:
        target.write_bytes(source)
        target.chmod(0o755)
    except OSError as exc:
        console.print(f"[bold red]ERROR:[/bold red] Could not create file: {escape(str(exc))}")
        raise typer.Exit(code=1)
