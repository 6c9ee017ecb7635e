"""Remote script models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rightst.models.attachments import RemoteLink

# Revision number the remote platform uses for the mutable head revision.
HEAD_REVISION = 0

SCRIPTS_COLLECTION = "/api/right_scripts"


def script_handle(script_id: str | int) -> str:
    """Return the canonical handle for a script id."""
    return f"{SCRIPTS_COLLECTION}/{script_id}"


class ScriptSummary(BaseModel):
    """A remote script as returned by a listing call."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    revision: int = HEAD_REVISION
    description: str = ""
    links: list[RemoteLink] = Field(default_factory=list)

    @property
    def handle(self) -> str:
        return script_handle(self.id)

    @property
    def is_head(self) -> bool:
        return self.revision == HEAD_REVISION

    @property
    def revision_label(self) -> str:
        """``HEAD`` for the head revision, otherwise the revision number."""
        return "HEAD" if self.is_head else str(self.revision)


class ScriptFields(BaseModel):
    """Fields sent on script create and update."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    source: str
