"""``right-st rightscript upload PATH... [--force]`` — push scripts.

Two stages. Every file is planned first: metadata parsed, the filename
fallback applied under ``--force``, and every attachment fingerprinted.
If any file fails, nothing is pushed. Then each script is pushed in turn;
a failing script does not stop the rest.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rightst.cli.context import CliContext
from rightst.cli.render import ScriptRenderer
from rightst.core.errors import RightstError
from rightst.core.paths import walk_paths
from rightst.core.pipeline import PushPipeline, plan_batch

console = Console()


def upload_cmd(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(
        ..., exists=True, help="File or directory containing script files to upload."
    ),
    force: bool = typer.Option(
        False, "--force", help="Force upload of file if metadata is not present."
    ),
) -> None:
    """Upload RightScripts and reconcile their attachments."""
    state: CliContext = ctx.obj

    # Pass 1: validate everything locally before touching the remote side.
    batch = plan_batch(walk_paths(paths), force=force)
    if not batch.ok:
        for path, error in batch.failures.items():
            console.print(f"[bold red]{escape(path)}:[/bold red] {escape(error)}")
        console.print(
            f"[bold red]{len(batch.failures)} script(s) failed validation; "
            "nothing was uploaded.[/bold red]"
        )
        raise typer.Exit(code=1)

    # Pass 2: push.
    try:
        pipeline = PushPipeline(state.get_gateway())
    except RightstError as exc:
        console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    results = pipeline.apply(batch)

    ScriptRenderer(console).print_push_results(results)
    if any(not r.ok for r in results):
        raise typer.Exit(code=1)
