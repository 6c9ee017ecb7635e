"""right-st data models — all Pydantic v2, all frozen (immutable)."""

from rightst.models.attachments import (
    OWNING_SCRIPT_REL,
    LocalAttachment,
    RemoteAttachment,
    RemoteLink,
)
from rightst.models.metadata import ScriptMetadata
from rightst.models.plan import (
    AttachmentOperation,
    BatchPlan,
    OperationKind,
    PushResult,
    ReconciliationPlan,
    ScriptPlan,
)
from rightst.models.scripts import (
    HEAD_REVISION,
    SCRIPTS_COLLECTION,
    ScriptFields,
    ScriptSummary,
    script_handle,
)

__all__ = [
    # metadata
    "ScriptMetadata",
    # attachments
    "OWNING_SCRIPT_REL",
    "LocalAttachment",
    "RemoteAttachment",
    "RemoteLink",
    # scripts
    "HEAD_REVISION",
    "SCRIPTS_COLLECTION",
    "ScriptFields",
    "ScriptSummary",
    "script_handle",
    # plans
    "AttachmentOperation",
    "BatchPlan",
    "OperationKind",
    "PushResult",
    "ReconciliationPlan",
    "ScriptPlan",
]
