"""Reconciliation and push plan models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from rightst.models.attachments import LocalAttachment, RemoteAttachment
from rightst.models.metadata import ScriptMetadata


class OperationKind(str, Enum):
    """Kind of remote attachment operation."""

    DELETE = "delete"
    CREATE = "create"


class AttachmentOperation(BaseModel):
    """A single remote attachment mutation emitted by the reconciler."""

    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    fingerprint: str
    name: str
    handle: str  # delete target, or the owning script for a create
    local: LocalAttachment | None = None


class ReconciliationPlan(BaseModel):
    """The create/keep/delete decision set between local and remote attachments.

    Fingerprint sets are disjoint by construction:
    ``to_delete | unchanged == remote`` and ``to_create | unchanged == local``.
    """

    model_config = ConfigDict(frozen=True)

    to_delete: list[RemoteAttachment] = Field(default_factory=list)
    to_create: list[LocalAttachment] = Field(default_factory=list)
    unchanged: list[LocalAttachment] = Field(default_factory=list)

    @property
    def delete_fingerprints(self) -> set[str]:
        return {a.digest for a in self.to_delete}

    @property
    def create_fingerprints(self) -> set[str]:
        return {a.fingerprint for a in self.to_create}

    @property
    def unchanged_fingerprints(self) -> set[str]:
        return {a.fingerprint for a in self.unchanged}

    @property
    def is_noop(self) -> bool:
        """True when nothing needs to be deleted or created."""
        return not self.to_delete and not self.to_create


class ScriptPlan(BaseModel):
    """A locally validated script, ready to push."""

    model_config = ConfigDict(frozen=True)

    path: Path
    metadata: ScriptMetadata
    attachments: list[LocalAttachment] = Field(default_factory=list)
    name_derived: bool = False  # name came from the filename, not metadata


class BatchPlan(BaseModel):
    """Output of the planning stage for a batch of script files."""

    model_config = ConfigDict(frozen=True)

    scripts: list[ScriptPlan] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)  # path -> error

    @property
    def ok(self) -> bool:
        return not self.failures


class PushResult(BaseModel):
    """Outcome of pushing one script."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str
    handle: str = ""
    created: bool = False
    operations: list[AttachmentOperation] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)  # attachment names
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
