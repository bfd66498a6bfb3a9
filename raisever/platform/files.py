"""Filesystem helpers for package.json, the changelog and .raiseverrc."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "file_exists"]


def file_exists(path: Path) -> bool:
    """True for an existing regular file; directories and unreadable paths are False."""
    try:
        return path.is_file()
    except OSError:
        return False


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace the content of path in one step.

    The text goes to a hidden sibling temp file which is then renamed over
    path, so readers see the old file or the new one, never a partial one.
    Line endings in content are written untranslated.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w",
        encoding=encoding,
        newline="",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(handle.name)
    try:
        with handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
