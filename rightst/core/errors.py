"""Error taxonomy for script pushes.

Every error carries enough context (path, name, fingerprint, handle) for the
batch loop to report it without re-deriving anything.
"""

from __future__ import annotations

from pathlib import Path


class RightstError(RuntimeError):
    """Base class for all right-st errors."""


class ConfigError(RightstError):
    """Raised when login configuration is missing, unreadable, or incomplete."""


class ParseError(RightstError):
    """Raised when a script's metadata block is malformed or missing."""

    def __init__(self, path: Path | str | None, construct: str) -> None:
        self.path = path
        self.construct = construct
        where = f"{path}: " if path else ""
        super().__init__(f"{where}invalid metadata: {construct}")


class AttachmentUnreadable(RightstError):
    """Raised when a declared attachment cannot be opened or read to completion."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read attachment {path}: {reason}")


class AmbiguousTarget(RightstError):
    """Raised when more than one head-revision remote script shares a name."""

    def __init__(self, name: str, handles: list[str]) -> None:
        self.name = name
        self.handles = list(handles)
        super().__init__(
            f"Matched multiple scripts named '{name}' at head revision "
            f"({', '.join(self.handles)}). Delete one or refer to it by handle."
        )


class NotFound(RightstError):
    """Raised when no remote script matches a name, id, or handle."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"Found no scripts matching {reference}")


class RemoteOperationFailed(RightstError):
    """Raised when a gateway call fails or returns a non-success status.

    ``fingerprint`` and ``attachment_name`` are filled in by the reconciler
    when the failure happened on an attachment operation.
    """

    def __init__(
        self,
        operation: str,
        handle: str = "",
        *,
        status: int | None = None,
        body: str = "",
        fingerprint: str = "",
        attachment_name: str = "",
    ) -> None:
        self.operation = operation
        self.handle = handle
        self.status = status
        self.body = body
        self.fingerprint = fingerprint
        self.attachment_name = attachment_name
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [f"{self.operation} failed"]
        if self.handle:
            parts.append(f"on {self.handle}")
        if self.attachment_name:
            parts.append(f"for attachment '{self.attachment_name}'")
        if self.fingerprint:
            parts.append(f"(md5 {self.fingerprint})")
        msg = " ".join(parts)
        if self.status is not None:
            msg += f": HTTP {self.status}"
        if self.body:
            msg += f": {self.body}"
        return msg

    def for_attachment(self, fingerprint: str, name: str) -> RemoteOperationFailed:
        """Return a copy annotated with the attachment that failed."""
        return RemoteOperationFailed(
            self.operation,
            self.handle,
            status=self.status,
            body=self.body,
            fingerprint=fingerprint,
            attachment_name=name,
        )


class PushIncomplete(RightstError):
    """Raised when a push fails after the remote script was created or updated.

    Carries what already happened remotely (the script handle and the
    attachment operations applied before the failure) so the outcome can
    still be reported. Nothing is rolled back.
    """

    def __init__(
        self,
        cause: RightstError,
        *,
        handle: str,
        created: bool,
        operations: list | None = None,
    ) -> None:
        self.cause = cause
        self.handle = handle
        self.created = created
        self.operations = list(operations or [])
        super().__init__(str(cause))
