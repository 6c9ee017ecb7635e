"""Remote State Snapshot — the attachments currently stored against a script."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from rightst.gateway import RemoteScriptGateway
from rightst.models.attachments import RemoteAttachment

logger = logging.getLogger(__name__)


class RemoteSnapshot(BaseModel):
    """Attachments of one remote script, read in a single listing call."""

    model_config = ConfigDict(frozen=True)

    handle: str
    attachments: list[RemoteAttachment] = Field(default_factory=list)

    def by_digest(self) -> dict[str, RemoteAttachment]:
        """Index attachments by digest.

        If two remote attachments share a digest, the later one in the
        listing wins.
        """
        index: dict[str, RemoteAttachment] = {}
        for attachment in self.attachments:
            index[attachment.digest] = attachment
        return index


def take_snapshot(gateway: RemoteScriptGateway, handle: str) -> RemoteSnapshot:
    """List all attachments of the script at *handle*."""
    attachments = gateway.list_attachments(handle)
    logger.debug("Script %s has %d remote attachment(s)", handle, len(attachments))
    return RemoteSnapshot(handle=handle, attachments=attachments)
