"""right-st: keep RightScripts and their attachments in sync with local files.

Scripts are plain text files carrying an embedded YAML metadata block
(name, description, attachments). Pushing a script creates or updates it
by exact name at head revision, then reconciles its attachments by MD5
content fingerprint: stale content is deleted first, new content uploaded
second, and identical content left alone.
"""

__version__ = "0.1.0"
__description__ = "A command-line application for managing RightScripts"

from rightst.core.pipeline import PushPipeline
from rightst.core.reconciler import AttachmentReconciler
from rightst.core.upsert import ScriptUpsertController
from rightst.cli.app import app as cli

__all__ = [
    "AttachmentReconciler",
    "PushPipeline",
    "ScriptUpsertController",
    "cli",
    "__version__",
]
