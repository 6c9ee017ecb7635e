"""``right-st rightscript scaffold PATH...`` — add metadata blocks to scripts."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rightst.core.errors import RightstError
from rightst.core.metadata_parser import scaffold_metadata
from rightst.core.paths import walk_paths

console = Console()


def scaffold_cmd(
    paths: list[Path] = typer.Argument(
        ..., exists=True, help="File or directory to set metadata for."
    ),
) -> None:
    """Add RightScript YAML metadata comments to files that have none."""
    for path in walk_paths(paths):
        try:
            written = scaffold_metadata(path)
        except (RightstError, OSError, UnicodeDecodeError) as exc:
            console.print(f"[bold red]{escape(str(path))}:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=1)
        if written:
            console.print(f"{escape(str(path))} - [green]metadata added[/green]")
        else:
            console.print(f"{escape(str(path))} - [dim]already has metadata[/dim]")
