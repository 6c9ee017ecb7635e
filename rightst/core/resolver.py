"""Script lookup by exact name at head revision, and reference resolution."""

from __future__ import annotations

import logging
import re

from rightst.core.errors import AmbiguousTarget, NotFound
from rightst.gateway import RemoteScriptGateway
from rightst.models.scripts import SCRIPTS_COLLECTION, ScriptSummary, script_handle

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^\d+$")
_HANDLE_RE = re.compile(rf"^{re.escape(SCRIPTS_COLLECTION)}/\d+$")


def find_head_script(gateway: RemoteScriptGateway, name: str) -> ScriptSummary | None:
    """Return the single head-revision script named exactly *name*.

    The remote name filter is a partial match, so the exact name is
    re-checked here. Returns ``None`` when nothing matches.

    Raises
    ------
    AmbiguousTarget
        If more than one head-revision script carries the name.
    """
    candidates = gateway.list_scripts(name)
    matches = [s for s in candidates if s.name == name and s.is_head]
    logger.debug(
        "Lookup '%s': %d candidate(s), %d exact head match(es)",
        name,
        len(candidates),
        len(matches),
    )
    if len(matches) > 1:
        raise AmbiguousTarget(name, [s.handle for s in matches])
    return matches[0] if matches else None


def resolve_reference(gateway: RemoteScriptGateway, reference: str) -> str:
    """Turn a numeric id, a handle, or a script name into a handle.

    Raises ``NotFound`` for an unknown name and ``AmbiguousTarget`` when
    the name matches more than one head-revision script.
    """
    if _ID_RE.match(reference):
        return script_handle(reference)
    if _HANDLE_RE.match(reference):
        return reference
    script = find_head_script(gateway, reference)
    if script is None:
        raise NotFound(reference)
    return script.handle
