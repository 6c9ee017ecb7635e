"""Embedded metadata parsing and scaffolding.

Metadata lives in a YAML document inside the script's leading comment
region::

    #!/bin/bash
    # ---
    # RightScript Name: Install widget
    # Description: Installs the widget
    # Inputs: {}
    # Attachments:
    #   - widget.tar.gz
    # ...

The opening ``---`` line fixes the comment prefix; every following line up
to the closing ``...`` must carry the same prefix.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from rightst.core.errors import ParseError
from rightst.models.metadata import ScriptMetadata

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", "//", "--", ";", "REM")
_OPEN_RE = re.compile(r"^\s*(?P<prefix>#|//|--|;|REM)\s?---\s*$")
_CLOSE = "..."

# Comment prefix used when scaffolding, by file extension.
_SCAFFOLD_PREFIXES: dict[str, str] = {
    ".bat": "REM",
    ".cmd": "REM",
    ".js": "//",
    ".go": "//",
    ".lua": "--",
    ".sql": "--",
}

DESCRIPTION_PLACEHOLDER = (
    "(put your description here, it can be multiple lines using YAML syntax)"
)


def _is_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(_COMMENT_PREFIXES)


def _find_block(lines: list[str], path: Path | None) -> list[str] | None:
    """Return the YAML lines of the metadata block, or None if there is none."""
    start = None
    prefix = ""
    for i, line in enumerate(lines):
        match = _OPEN_RE.match(line)
        if match:
            start, prefix = i, match.group("prefix")
            break
        if not _is_comment(line):
            return None
    if start is None:
        return None

    body: list[str] = []
    for lineno, line in enumerate(lines[start + 1:], start=start + 2):
        stripped = line.lstrip()
        if not stripped.startswith(prefix):
            raise ParseError(
                path, f"line {lineno} inside the metadata block is not a '{prefix}' comment"
            )
        content = stripped[len(prefix):]
        if content.startswith(" "):
            content = content[1:]
        if content.rstrip() == _CLOSE:
            return body
        body.append(content.rstrip("\r\n"))
    raise ParseError(path, f"metadata block is not terminated with '{prefix} {_CLOSE}'")


def parse_metadata(text: str, path: Path | None = None) -> ScriptMetadata:
    """Parse the embedded metadata block from script text.

    Returns a zero-value ``ScriptMetadata`` when the script has no block.

    Raises
    ------
    ParseError
        If the block is unterminated, is not valid YAML, is not a mapping,
        or carries unknown keys or values of the wrong type.
    """
    block = _find_block(text.splitlines(), path)
    if block is None:
        return ScriptMetadata()

    try:
        data = yaml.safe_load("\n".join(block))
    except yaml.YAMLError as exc:
        problem = getattr(exc, "problem", None) or str(exc)
        raise ParseError(path, f"invalid YAML ({problem})") from exc

    if data is None:
        return ScriptMetadata()
    if not isinstance(data, dict):
        raise ParseError(path, f"expected a mapping, got {type(data).__name__}")

    try:
        return ScriptMetadata.model_validate(data)
    except ValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(p) for p in err["loc"])
        raise ParseError(path, f"'{field}': {err['msg']}") from exc


def parse_metadata_file(path: Path) -> ScriptMetadata:
    """Read *path* and parse its embedded metadata block."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"file is not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise ParseError(path, f"cannot read file ({exc.strerror or exc})") from exc
    return parse_metadata(text, path)


def render_metadata_block(metadata: ScriptMetadata, prefix: str = "#") -> str:
    """Render *metadata* as a commented YAML block, newline-terminated."""
    document = yaml.safe_dump(
        metadata.model_dump(by_alias=True),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    lines = [f"{prefix} ---"]
    lines.extend(f"{prefix} {line}" for line in document.splitlines())
    lines.append(f"{prefix} {_CLOSE}")
    return "\n".join(lines) + "\n"


def scaffold_metadata(path: Path) -> bool:
    """Insert a metadata block into *path* if it has none.

    The name is taken from the filename stem. The block goes after a
    shebang line when there is one. Returns ``True`` if the file was
    rewritten, ``False`` if it already carried metadata.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if _find_block(text.splitlines(), path) is not None:
        logger.info("%s already has metadata, skipping", path)
        return False

    prefix = _SCAFFOLD_PREFIXES.get(path.suffix.lower(), "#")
    block = render_metadata_block(
        ScriptMetadata(name=path.stem, description=DESCRIPTION_PLACEHOLDER),
        prefix,
    )

    lines = text.splitlines(keepends=True)
    if lines and lines[0].startswith("#!"):
        head = lines[0] if lines[0].endswith("\n") else lines[0] + "\n"
        new_text = head + block + "".join(lines[1:])
    else:
        new_text = block + text

    path.write_text(new_text, encoding="utf-8")
    logger.info("Added metadata to %s", path)
    return True
