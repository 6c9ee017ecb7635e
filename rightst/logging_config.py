"""Logging setup for the CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the CLI entry point.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    """Route all log records through a Rich handler on stderr.

    Calling it again replaces the handler rather than adding a second one.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=level.upper() == "DEBUG",
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs every connection at DEBUG; only show it when asked for.
    logging.getLogger("urllib3").setLevel(
        logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING
    )
