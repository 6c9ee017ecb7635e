"""Shared test fixtures for right-st."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO

import pytest

from rightst.core.errors import RemoteOperationFailed
from rightst.core.hasher import md5_hex
from rightst.models.attachments import OWNING_SCRIPT_REL, RemoteAttachment, RemoteLink
from rightst.models.scripts import ScriptFields, ScriptSummary


class RecordingGateway:
    """In-memory ``RemoteScriptGateway`` that records every call.

    ``calls`` holds ``(method, handle, detail)`` tuples in call order.
    Operations named in ``failures`` raise ``RemoteOperationFailed``.
    """

    def __init__(self) -> None:
        self.scripts: dict[str, ScriptSummary] = {}
        self.sources: dict[str, str] = {}
        self.attachments: dict[str, list[RemoteAttachment]] = {}
        self.calls: list[tuple[str, str, Any]] = []
        self.failures: set[str] = set()
        self._next_id = 100

    # -- helpers -------------------------------------------------------

    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    def _check(self, operation: str, handle: str) -> None:
        if operation in self.failures:
            raise RemoteOperationFailed(operation, handle, status=500, body="boom")

    def add_script(
        self, name: str, *, revision: int = 0, source: str = "", description: str = ""
    ) -> str:
        script = ScriptSummary(
            id=self._new_id(), name=name, revision=revision, description=description
        )
        self.scripts[script.handle] = script
        self.sources[script.handle] = source
        self.attachments[script.handle] = []
        return script.handle

    def add_attachment(
        self, handle: str, name: str, content: bytes, *, owner_link: bool = True
    ) -> RemoteAttachment:
        links = [RemoteLink(rel=OWNING_SCRIPT_REL, href=handle)] if owner_link else []
        attachment = RemoteAttachment(
            id=self._new_id(), name=name, digest=md5_hex(content), links=links
        )
        self.attachments[handle].append(attachment)
        return attachment

    def mutations(self) -> list[tuple[str, str, Any]]:
        """Recorded calls that change remote state."""
        writes = {"create_script", "update_script", "delete_attachment", "create_attachment"}
        return [c for c in self.calls if c[0] in writes]

    # -- RemoteScriptGateway ---------------------------------------------

    def list_scripts(self, name_filter: str) -> list[ScriptSummary]:
        self.calls.append(("list_scripts", "", name_filter))
        self._check("list_scripts", "")
        return [s for s in self.scripts.values() if name_filter in s.name]

    def get_script(self, handle: str) -> ScriptSummary:
        self.calls.append(("get_script", handle, None))
        self._check("get_script", handle)
        if handle not in self.scripts:
            raise RemoteOperationFailed("show script", handle, status=404)
        return self.scripts[handle]

    def create_script(self, fields: ScriptFields) -> str:
        self.calls.append(("create_script", "", fields))
        self._check("create_script", "")
        handle = self.add_script(
            fields.name, source=fields.source, description=fields.description
        )
        return handle

    def update_script(self, handle: str, fields: ScriptFields) -> None:
        self.calls.append(("update_script", handle, fields))
        self._check("update_script", handle)
        current = self.scripts[handle]
        self.scripts[handle] = current.model_copy(
            update={"name": fields.name, "description": fields.description}
        )
        self.sources[handle] = fields.source

    def fetch_source(self, handle: str) -> bytes:
        self.calls.append(("fetch_source", handle, None))
        self._check("fetch_source", handle)
        return self.sources[handle].encode("utf-8")

    def list_attachments(self, handle: str) -> list[RemoteAttachment]:
        self.calls.append(("list_attachments", handle, None))
        self._check("list_attachments", handle)
        return list(self.attachments.get(handle, []))

    def delete_attachment(self, handle: str) -> None:
        self.calls.append(("delete_attachment", handle, None))
        self._check("delete_attachment", handle)
        owner, _, attachment_id = handle.rpartition("/attachments/")
        remaining = [a for a in self.attachments.get(owner, []) if a.id != attachment_id]
        if len(remaining) == len(self.attachments.get(owner, [])):
            raise RemoteOperationFailed("delete attachment", handle, status=404)
        self.attachments[owner] = remaining

    def create_attachment(self, handle: str, name: str, stream: BinaryIO) -> None:
        data = stream.read()
        self.calls.append(("create_attachment", handle, name))
        self._check("create_attachment", handle)
        self.attachments[handle].append(
            RemoteAttachment(
                id=self._new_id(),
                name=name,
                digest=md5_hex(data),
                links=[RemoteLink(rel=OWNING_SCRIPT_REL, href=handle)],
            )
        )


def metadata_block(
    name: str | None, attachments: list[str] | None = None, description: str = ""
) -> str:
    """Render a ``#``-style metadata block for test scripts."""
    if name is None:
        return ""
    lines = ["# ---", f"# RightScript Name: {name}"]
    if description:
        lines.append(f"# Description: {description}")
    lines.append("# Inputs: {}")
    if attachments:
        lines.append("# Attachments:")
        lines.extend(f"#   - {a}" for a in attachments)
    else:
        lines.append("# Attachments: []")
    lines.append("# ...")
    return "\n".join(lines) + "\n"


@pytest.fixture
def gateway() -> RecordingGateway:
    """Provide an empty in-memory gateway."""
    return RecordingGateway()


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write a script file plus its attachment files.

    ``attachments`` maps filename to bytes; pass ``declared`` to declare a
    different list than the files written. ``name=None`` writes no metadata.
    """

    def _factory(
        filename: str = "install.sh",
        *,
        name: str | None = "Install widget",
        attachments: dict[str, bytes] | None = None,
        declared: list[str] | None = None,
        description: str = "",
        body: str = "echo hello\n",
        directory: Path | None = None,
    ) -> Path:
        base = directory or tmp_path
        base.mkdir(parents=True, exist_ok=True)
        attachments = attachments or {}
        for att_name, content in attachments.items():
            att_path = base / att_name
            att_path.parent.mkdir(parents=True, exist_ok=True)
            att_path.write_bytes(content)
        names = declared if declared is not None else list(attachments)
        script = base / filename
        script.write_text(
            "#!/bin/bash\n" + metadata_block(name, names, description) + body,
            encoding="utf-8",
        )
        return script

    return _factory

