"""Remote Script Gateway protocol.

The core never talks HTTP directly. It depends on any object satisfying
``RemoteScriptGateway``; ``rightst.gateway.http.HttpGateway`` is the
implementation used by the CLI. All methods are synchronous and raise
``RemoteOperationFailed`` on any failure.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable

from rightst.models.attachments import RemoteAttachment
from rightst.models.scripts import ScriptFields, ScriptSummary


@runtime_checkable
class RemoteScriptGateway(Protocol):
    """Operations the core needs from the remote automation platform."""

    def list_scripts(self, name_filter: str) -> list[ScriptSummary]:
        """List scripts whose name matches *name_filter* (may be a partial match)."""
        ...

    def get_script(self, handle: str) -> ScriptSummary:
        """Return a single script by handle."""
        ...

    def create_script(self, fields: ScriptFields) -> str:
        """Create a script and return its handle."""
        ...

    def update_script(self, handle: str, fields: ScriptFields) -> None:
        """Update the script at *handle* in place."""
        ...

    def fetch_source(self, handle: str) -> bytes:
        """Return the source body of a script."""
        ...

    def list_attachments(self, handle: str) -> list[RemoteAttachment]:
        """Return every attachment stored against a script."""
        ...

    def delete_attachment(self, handle: str) -> None:
        """Delete the attachment at *handle*."""
        ...

    def create_attachment(self, handle: str, name: str, stream: BinaryIO) -> None:
        """Upload *stream* as an attachment named *name* on script *handle*."""
        ...


__all__ = ["RemoteScriptGateway"]
