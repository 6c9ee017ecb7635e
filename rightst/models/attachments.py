"""Local and remote attachment models.

Attachments are matched by content fingerprint only. The declared filename
is used for display and as the upload name, never for matching.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Relation label that points from an attachment back to its owning script.
OWNING_SCRIPT_REL = "right_script"


class LocalAttachment(BaseModel):
    """An attachment declared by a local script, with its content fingerprint."""

    model_config = ConfigDict(frozen=True)

    filename: str
    absolute_path: Path
    fingerprint: str  # 32-char lowercase hex MD5

    @property
    def upload_name(self) -> str:
        """Name the attachment is stored under remotely (basename of the declaration)."""
        return Path(self.filename).name


class RemoteLink(BaseModel):
    """A named relation carried by a remote resource."""

    model_config = ConfigDict(frozen=True)

    rel: str
    href: str


class RemoteAttachment(BaseModel):
    """An attachment currently stored against a remote script."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    digest: str
    links: list[RemoteLink] = Field(default_factory=list)

    def owning_script_handle(self) -> str | None:
        """Return the handle of the script this attachment belongs to.

        The attachment's own ``self`` link is not reliable on the remote API,
        so the owner is read from the ``right_script`` relation instead.
        Returns ``None`` when no such relation is present.
        """
        owner: str | None = None
        for link in self.links:
            if link.rel == OWNING_SCRIPT_REL:
                owner = link.href
        return owner

    def delete_handle(self, fallback_owner: str | None = None) -> str:
        """Build the handle used to delete this attachment.

        Parameters
        ----------
        fallback_owner:
            Script handle to use when the attachment carries no owning
            script relation (normally the script being reconciled).
        """
        owner = self.owning_script_handle() or fallback_owner or ""
        return f"{owner.rstrip('/')}/attachments/{self.id}"
