"""File I/O operations for rendered documents and scratch artifacts."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def read_lines(path: Path) -> list[str]:
    """Read a UTF-8 text file as a list of lines without line endings."""
    return path.read_text(encoding="utf-8").splitlines()


def write_lines(path: Path, lines: list[str]) -> None:
    """Write lines back as UTF-8, newline-terminated."""
    atomic_write_text(path, "\n".join(lines) + "\n")
