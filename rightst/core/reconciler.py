"""Content-addressed attachment reconciliation.

Aligns the attachments stored against a remote script with the attachments
a local script declares, using content fingerprints as the only identity:

- ``to_delete = remote - local``: removed from the declaration, or the
  file's bytes changed (the old fingerprint is orphaned).
- ``to_create = local - remote``: new attachments, or changed content that
  must be re-uploaded under its declared name.
- ``unchanged = local & remote``: nothing to do. Display names are not
  compared, so renaming a file without changing its bytes is not corrected
  remotely.

Operations run in two passes, every delete before any create. The first
failing operation aborts the rest; already-applied operations are not
rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from rightst.core.errors import AttachmentUnreadable, RemoteOperationFailed, RightstError
from rightst.core.hasher import build_content_index
from rightst.core.snapshot import RemoteSnapshot, take_snapshot
from rightst.gateway import RemoteScriptGateway
from rightst.models.attachments import LocalAttachment
from rightst.models.plan import AttachmentOperation, OperationKind, ReconciliationPlan

logger = logging.getLogger(__name__)


def diff_attachments(
    local: Iterable[LocalAttachment], snapshot: RemoteSnapshot
) -> ReconciliationPlan:
    """Compute the create/keep/delete decision set.

    Pure function: no remote calls, no file access. Deletes keep the
    remote listing order; creates keep the local declaration order.
    """
    local_index = build_content_index(local)
    remote_index = snapshot.by_digest()

    to_delete = [a for d, a in remote_index.items() if d not in local_index]
    to_create = [a for f, a in local_index.items() if f not in remote_index]
    unchanged = [a for f, a in local_index.items() if f in remote_index]

    return ReconciliationPlan(
        to_delete=to_delete, to_create=to_create, unchanged=unchanged
    )


def plan_operations(
    plan: ReconciliationPlan, script_handle: str
) -> list[AttachmentOperation]:
    """Order a plan into concrete operations: all deletes, then all creates."""
    ops: list[AttachmentOperation] = []
    for remote in plan.to_delete:
        ops.append(
            AttachmentOperation(
                kind=OperationKind.DELETE,
                fingerprint=remote.digest,
                name=remote.name,
                handle=remote.delete_handle(fallback_owner=script_handle),
            )
        )
    for local in plan.to_create:
        ops.append(
            AttachmentOperation(
                kind=OperationKind.CREATE,
                fingerprint=local.fingerprint,
                name=local.upload_name,
                handle=script_handle,
                local=local,
            )
        )
    return ops


class AttachmentReconciler:
    """Drives attachment reconciliation through a gateway.

    Parameters
    ----------
    gateway:
        The remote gateway used for the snapshot and every mutation.
    """

    def __init__(self, gateway: RemoteScriptGateway) -> None:
        self._gateway = gateway

    def plan(
        self, script_handle: str, local: Iterable[LocalAttachment]
    ) -> ReconciliationPlan:
        """Snapshot the remote script and diff it against *local*."""
        snapshot = take_snapshot(self._gateway, script_handle)
        return diff_attachments(local, snapshot)

    def iter_apply(
        self, plan: ReconciliationPlan, script_handle: str
    ) -> Iterator[AttachmentOperation]:
        """Execute a plan, deletes first, yielding each operation once applied.

        Consumers that stop on an exception still hold every operation that
        reached the remote side before it.

        Raises
        ------
        RemoteOperationFailed
            On the first failing remote call, annotated with the
            fingerprint and name of the attachment involved.
        AttachmentUnreadable
            If a local attachment cannot be opened for upload.
        """
        for local in plan.unchanged:
            logger.info(
                "  Attachment '%s' already uploaded with md5 %s",
                local.filename,
                local.fingerprint,
            )

        for op in plan_operations(plan, script_handle):
            try:
                if op.kind == OperationKind.DELETE:
                    logger.info(
                        "  Deleting attachment '%s' with HREF '%s'", op.name, op.handle
                    )
                    self._gateway.delete_attachment(op.handle)
                else:
                    logger.info(
                        "  Uploading attachment '%s' with md5 %s", op.name, op.fingerprint
                    )
                    self._upload(op)
            except RemoteOperationFailed as exc:
                raise exc.for_attachment(op.fingerprint, op.name) from exc
            yield op

    def apply(
        self, plan: ReconciliationPlan, script_handle: str
    ) -> list[AttachmentOperation]:
        """Execute a plan, deletes first. Returns the operations applied."""
        return list(self.iter_apply(plan, script_handle))

    def reconcile(
        self, script_handle: str, local: Iterable[LocalAttachment]
    ) -> tuple[ReconciliationPlan, list[AttachmentOperation]]:
        """Plan and apply in one step."""
        plan = self.plan(script_handle, local)
        return plan, self.apply(plan, script_handle)

    def _upload(self, op: AttachmentOperation) -> None:
        local = op.local
        if local is None:
            raise RightstError(f"Upload of '{op.name}' has no local file")
        try:
            fh = open(local.absolute_path, "rb")
        except OSError as exc:
            raise AttachmentUnreadable(local.absolute_path, exc.strerror or str(exc)) from exc
        with fh:
            self._gateway.create_attachment(op.handle, op.name, fh)
