"""Blocking file helpers shared by the stores and the workspace manager.

Callers run these in the thread pool via ``anyio.to_thread.run_sync``.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    Readers never see a partially-written file and a failed write leaves the
    previous content in place.  The temp file is created in the same
    directory so ``os.replace`` stays on one filesystem.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def read_file(path: Path) -> str | None:
    """Read file contents, or ``None`` if the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def is_file(path: Path) -> bool:
    """``Path.is_file`` that reports ``False`` instead of raising."""
    try:
        return path.is_file()
    except (OSError, ValueError):
        return False
