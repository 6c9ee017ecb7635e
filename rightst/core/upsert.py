"""Script Upsert Controller.

Two-step state machine per script:

1. **Resolve** — look the script up by exact name at head revision.
   Zero matches goes to Create, one goes to Update, more than one is
   ``AmbiguousTarget`` and nothing is written.
2. **Create** / **Update** — send ``{name, description, source}``.

Once the script handle is known, attachments are reconciled against it.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from rightst.core.errors import ParseError, PushIncomplete, RightstError
from rightst.core.reconciler import AttachmentReconciler
from rightst.core.resolver import find_head_script
from rightst.gateway import RemoteScriptGateway
from rightst.models.plan import AttachmentOperation, PushResult, ScriptPlan
from rightst.models.scripts import ScriptFields

logger = logging.getLogger(__name__)


class UpsertAction(str, Enum):
    """Which branch the controller took for a script."""

    CREATE = "create"
    UPDATE = "update"


def read_source(path: Path) -> str:
    """Read a script's source body as UTF-8 text."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"source is not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise ParseError(path, f"cannot read source ({exc.strerror or exc})") from exc


class ScriptUpsertController:
    """Creates or updates a remote script, then reconciles its attachments.

    Parameters
    ----------
    gateway:
        Remote gateway; the controller holds no other state.
    reconciler:
        Attachment reconciler. Built from *gateway* if not provided.
    """

    def __init__(
        self,
        gateway: RemoteScriptGateway,
        reconciler: AttachmentReconciler | None = None,
    ) -> None:
        self._gateway = gateway
        self._reconciler = reconciler or AttachmentReconciler(gateway)

    def upsert(self, plan: ScriptPlan) -> tuple[str, UpsertAction]:
        """Create or update the remote script for *plan*.

        Returns the script handle and the branch taken.
        """
        metadata = plan.metadata
        existing = find_head_script(self._gateway, metadata.name)
        fields = ScriptFields(
            name=metadata.name,
            description=metadata.description,
            source=read_source(plan.path),
        )

        if existing is None:
            logger.info(
                "Creating a new RightScript named '%s' from %s", metadata.name, plan.path
            )
            handle = self._gateway.create_script(fields)
            logger.info("  RightScript created with HREF %s", handle)
            return handle, UpsertAction.CREATE

        handle = existing.handle
        logger.info(
            "Updating existing RightScript named '%s' with HREF %s from %s",
            metadata.name,
            handle,
            plan.path,
        )
        self._gateway.update_script(handle, fields)
        return handle, UpsertAction.UPDATE

    def push(self, plan: ScriptPlan) -> PushResult:
        """Upsert the script and reconcile its attachments.

        Raises any ``RightstError`` from the upsert itself. Once the script
        exists remotely, a failure is raised as ``PushIncomplete`` carrying
        the handle and the attachment operations already applied. The
        caller decides whether the batch continues.
        """
        handle, action = self.upsert(plan)
        created = action == UpsertAction.CREATE

        applied: list[AttachmentOperation] = []
        try:
            reconciliation = self._reconciler.plan(handle, plan.attachments)
            for op in self._reconciler.iter_apply(reconciliation, handle):
                applied.append(op)
        except RightstError as exc:
            raise PushIncomplete(
                exc, handle=handle, created=created, operations=applied
            ) from exc

        return PushResult(
            path=plan.path,
            name=plan.metadata.name,
            handle=handle,
            created=created,
            operations=applied,
            unchanged=[a.filename for a in reconciliation.unchanged],
        )
