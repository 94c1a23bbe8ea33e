from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path

from .paths import ensure_dir

_PATH_LOCKS_GUARD = threading.Lock()
_PATH_LOCKS: dict[str, threading.RLock] = {}


def path_lock(path: Path) -> threading.RLock:
    """
    Re-entrant lock shared by every store over the same resolved vault path in
    this process. Other processes writing the file are not covered.
    """
    key = str(path.expanduser().resolve())
    with _PATH_LOCKS_GUARD:
        lock = _PATH_LOCKS.get(key)
        if lock is None:
            lock = _PATH_LOCKS[key] = threading.RLock()
        return lock


def read_text(path: Path) -> str | None:
    """
    Read the vault file.

    Returns None when the file (or a parent directory) does not exist. Any
    other OSError propagates.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return None


def atomic_write_text(path: Path, payload: str, *, mode: int = 0o600) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_path, mode)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
