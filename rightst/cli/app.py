"""Main Typer application — imports and registers all CLI commands.

Entry point: ``right-st`` (configured via pyproject.toml console scripts).

Commands live under the ``rightscript`` group: list, show, upload,
download, scaffold, validate.
"""

from __future__ import annotations

from pathlib import Path

import typer

from rightst.cli.commands.download import download_cmd
from rightst.cli.commands.list_cmd import list_cmd
from rightst.cli.commands.scaffold import scaffold_cmd
from rightst.cli.commands.show import show_cmd
from rightst.cli.commands.upload import upload_cmd
from rightst.cli.commands.validate import validate_cmd
from rightst.cli.context import CliContext
from rightst.config import RightstConfig
from rightst.logging_config import setup_logging

app = typer.Typer(
    name="right-st",
    help="A command-line application for managing RightScripts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

rightscript_app = typer.Typer(
    help="RightScript stuff.",
    no_args_is_help=True,
)
app.add_typer(rightscript_app, name="rightscript")

# Register subcommands
rightscript_app.command(name="list", help="List RightScripts.")(list_cmd)
rightscript_app.command(name="show", help="Show a single RightScript and its attachments.")(show_cmd)
rightscript_app.command(name="upload", help="Upload a RightScript.")(upload_cmd)
rightscript_app.command(name="download", help="Download a RightScript to a file.")(download_cmd)
rightscript_app.command(
    name="scaffold", help="Add RightScript YAML metadata comments to a file or files."
)(scaffold_cmd)
rightscript_app.command(
    name="validate", help="Validate RightScript YAML metadata comments in a file or files."
)(validate_cmd)


def _version_callback(value: bool) -> None:
    if value:
        from rightst import __version__

        typer.echo(f"right-st {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Path = typer.Option(
        None, "--config", "-c", help="Set the config file path."
    ),
    environment: str = typer.Option(
        "", "--environment", "-e", help="Set the RightScale login environment."
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Debug mode."),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Print version.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Resolve configuration and logging before any command runs."""
    overrides: dict[str, object] = {}
    if config_file is not None:
        overrides["config_file"] = config_file
    if environment:
        overrides["environment"] = environment
    if debug:
        overrides["debug"] = True
    config = RightstConfig(**overrides)

    setup_logging(config.effective_log_level)

    if isinstance(ctx.obj, CliContext):
        ctx.obj.config = config
    else:
        ctx.obj = CliContext(config)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
