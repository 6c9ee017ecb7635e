"""Two-stage push pipeline: ``plan`` every script, then ``apply`` them.

Planning is local only: it parses metadata, applies the filename fallback,
and fingerprints every attachment. Nothing is sent to the remote platform
unless every script in the batch planned cleanly.

Applying pushes scripts one at a time. A failing script is recorded in its
``PushResult`` and the batch moves on to the next one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from rightst.core.errors import ParseError, PushIncomplete, RightstError
from rightst.core.hasher import fingerprint_attachments
from rightst.core.metadata_parser import parse_metadata_file
from rightst.core.upsert import ScriptUpsertController
from rightst.gateway import RemoteScriptGateway
from rightst.models.plan import BatchPlan, PushResult, ScriptPlan

logger = logging.getLogger(__name__)


class PlanFailedError(RightstError):
    """Raised when applying a batch whose planning stage had failures."""


def plan_script(path: Path, *, force: bool = False) -> ScriptPlan:
    """Validate one script file and fingerprint its attachments.

    Parameters
    ----------
    path:
        The script file.
    force:
        When the file has no metadata, derive the name from the filename
        stem instead of failing.
    """
    path = Path(path)
    metadata = parse_metadata_file(path)
    derived = False
    if metadata.is_empty:
        if not force:
            raise ParseError(
                path, "no embedded metadata (use --force to upload anyway)"
            )
        metadata = metadata.with_name(path.stem)
        derived = True
        logger.warning("No metadata in %s, using name '%s'", path, metadata.name)

    attachments = fingerprint_attachments(path, metadata.attachments)
    return ScriptPlan(
        path=path, metadata=metadata, attachments=attachments, name_derived=derived
    )


def plan_batch(paths: Iterable[Path], *, force: bool = False) -> BatchPlan:
    """Plan every script, collecting failures instead of stopping at the first."""
    scripts: list[ScriptPlan] = []
    failures: dict[str, str] = {}
    for path in paths:
        try:
            scripts.append(plan_script(path, force=force))
        except RightstError as exc:
            logger.error("%s: %s", path, exc)
            failures[str(path)] = str(exc)
    return BatchPlan(scripts=scripts, failures=failures)


class PushPipeline:
    """Runs planned scripts through the upsert controller.

    Parameters
    ----------
    gateway:
        Remote gateway handed to the controller.
    controller:
        Override the controller (mainly for tests).
    """

    def __init__(
        self,
        gateway: RemoteScriptGateway,
        controller: ScriptUpsertController | None = None,
    ) -> None:
        self._controller = controller or ScriptUpsertController(gateway)

    def plan(self, paths: Iterable[Path], *, force: bool = False) -> BatchPlan:
        return plan_batch(paths, force=force)

    def apply(self, batch: BatchPlan) -> list[PushResult]:
        """Push every planned script sequentially.

        Raises ``PlanFailedError`` if the batch has planning failures, so
        nothing is mutated for a partially valid batch.
        """
        if not batch.ok:
            raise PlanFailedError(
                f"{len(batch.failures)} script(s) failed validation; nothing was pushed"
            )

        results: list[PushResult] = []
        for script in batch.scripts:
            logger.info("Uploading %s", script.path)
            try:
                results.append(self._controller.push(script))
            except PushIncomplete as exc:
                logger.error("Push of %s failed: %s", script.path, exc)
                results.append(
                    PushResult(
                        path=script.path,
                        name=script.metadata.name,
                        handle=exc.handle,
                        created=exc.created,
                        operations=exc.operations,
                        error=str(exc),
                    )
                )
            except RightstError as exc:
                logger.error("Push of %s failed: %s", script.path, exc)
                results.append(
                    PushResult(path=script.path, name=script.metadata.name, error=str(exc))
                )
        return results

    def push(self, paths: Iterable[Path], *, force: bool = False) -> list[PushResult]:
        """Plan then apply."""
        return self.apply(self.plan(paths, force=force))
