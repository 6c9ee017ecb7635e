"""File system helpers."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def walk_paths(paths: Iterable[Path | str]) -> list[Path]:
    """Turn a mixed list of files and directories into a flat list of files.

    Directories are expanded recursively in sorted order. Raises
    ``FileNotFoundError`` for a path that does not exist.
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(p for p in sorted(path.rglob("*")) if p.is_file())
        elif path.exists():
            files.append(path)
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
    return files
