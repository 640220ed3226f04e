from __future__ import annotations

import os
from pathlib import Path

from .paths import ensure_dir


def read_bytes(path: Path) -> bytes | None:
    """
    Read a file from disk.

    Returns None for missing files and for files holding only whitespace.
    """
    if not path.exists():
        return None
    raw = path.read_bytes()
    if not raw.strip():
        return None
    return raw


def atomic_write_bytes(path: Path, payload: bytes) -> None:
    """
    Atomically write bytes to disk by writing to a temp file then replacing.
    """
    ensure_dir(path.parent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
