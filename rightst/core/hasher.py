"""Content fingerprints and the Content Hash Index.

Attachments are identified by the MD5 hex digest of their bytes, the same
digest the remote platform reports for stored attachments. MD5 is used for
byte-exact identity only, not for security.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from pathlib import Path

from rightst.core.errors import AttachmentUnreadable
from rightst.models.attachments import LocalAttachment

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def md5_hex(data: bytes) -> str:
    """Return the MD5 hex digest of raw bytes."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def file_fingerprint(path: Path) -> str:
    """Stream a file through MD5 and return its hex digest.

    Raises ``AttachmentUnreadable`` if the file cannot be opened or read to
    completion. No partial digest is ever returned.
    """
    digest = hashlib.md5(usedforsecurity=False)
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise AttachmentUnreadable(path, exc.strerror or str(exc)) from exc
    return digest.hexdigest()


def resolve_attachment(script_path: Path, filename: str) -> Path:
    """Resolve a declared attachment filename against the script's directory."""
    return (Path(script_path).parent / filename).absolute()


def fingerprint_attachments(
    script_path: Path, filenames: Iterable[str]
) -> list[LocalAttachment]:
    """Fingerprint every declared attachment, in declaration order."""
    attachments: list[LocalAttachment] = []
    for filename in filenames:
        full_path = resolve_attachment(script_path, filename)
        fingerprint = file_fingerprint(full_path)
        logger.debug("Fingerprinted %s -> %s", full_path, fingerprint)
        attachments.append(
            LocalAttachment(
                filename=filename,
                absolute_path=full_path,
                fingerprint=fingerprint,
            )
        )
    return attachments


def build_content_index(
    attachments: Iterable[LocalAttachment],
) -> dict[str, LocalAttachment]:
    """Index local attachments by fingerprint.

    Two declarations with identical content collapse into one entry; the
    later declaration's name wins.
    """
    index: dict[str, LocalAttachment] = {}
    for attachment in attachments:
        index[attachment.fingerprint] = attachment
    return index
