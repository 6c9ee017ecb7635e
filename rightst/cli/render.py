"""Rich rendering for script listings, attachment tables and push results."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rightst.models.attachments import LocalAttachment, RemoteAttachment
from rightst.models.plan import OperationKind, PushResult
from rightst.models.scripts import ScriptSummary


class ScriptRenderer:
    """Prints script data as Rich tables.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_scripts(self, scripts: list[ScriptSummary]) -> None:
        """One row per script: handle, revision, name."""
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("HREF", style="dim")
        table.add_column("Revision", justify="right")
        table.add_column("Name")
        for script in scripts:
            table.add_row(script.handle, script.revision_label, escape(script.name))
        self.console.print(table)

    def print_script(
        self, script: ScriptSummary, attachments: list[RemoteAttachment]
    ) -> None:
        """Script header followed by its attachments (id, md5, name)."""
        self.console.print(f"[bold]HREF:[/bold] {script.handle}")
        self.console.print(f"[bold]Revision:[/bold] {script.revision_label}")
        self.console.print(f"[bold]Name:[/bold] {escape(script.name)}")
        table = Table(title="Attachments", show_header=True, header_style="bold cyan")
        table.add_column("ID", justify="right")
        table.add_column("MD5", style="dim")
        table.add_column("Name")
        for a in attachments:
            table.add_row(a.id, a.digest, escape(a.name))
        self.console.print(table)

    def print_fingerprints(self, attachments: list[LocalAttachment]) -> None:
        for a in attachments:
            self.console.print(f"  {escape(a.filename)} [dim]{a.fingerprint}[/dim]")

    def print_push_results(self, results: list[PushResult]) -> None:
        """Summary table of a batch push."""
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Script")
        table.add_column("HREF", style="dim")
        table.add_column("Action", justify="center")
        table.add_column("Deleted", justify="right")
        table.add_column("Uploaded", justify="right")
        table.add_column("Unchanged", justify="right")
        table.add_column("Status")

        for r in results:
            deleted = sum(1 for op in r.operations if op.kind == OperationKind.DELETE)
            uploaded = sum(1 for op in r.operations if op.kind == OperationKind.CREATE)
            if r.ok:
                action = "created" if r.created else "updated"
                status = "[green]ok[/green]"
            else:
                action = "-"
                status = f"[bold red]{escape(r.error or '')}[/bold red]"
            table.add_row(
                escape(r.name), r.handle or "-", action, str(deleted), str(uploaded),
                str(len(r.unchanged)), status,
            )

        failed = sum(1 for r in results if not r.ok)
        border = "red" if failed else "green"
        self.console.print(
            Panel(table, title="[bold]Upload[/bold]", border_style=border, padding=(0, 1))
        )
