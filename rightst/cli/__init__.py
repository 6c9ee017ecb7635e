"""right-st CLI — Typer-based command-line interface.

Provides the ``right-st`` command with a ``rightscript`` group for listing,
showing, uploading, downloading, scaffolding and validating scripts.

All output uses Rich for formatted terminal display.
"""
