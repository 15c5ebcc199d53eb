"""Error taxonomy for the Tailwind post-render pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class MdTailwindError(Exception):
    """Base class for all errors raised by mdtailwind."""


class MissingInputError(MdTailwindError):
    """Raised when a referenced stylesheet, config or template does not exist."""

    def __init__(self, path: Path, what: str = "File") -> None:
        self.path = Path(path)
        super().__init__(f"{what}: {self.path} doesn't exist")


class ExternalToolError(MdTailwindError):
    """Raised when the CSS toolchain fails or produces no output."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = list(command) if command is not None else None
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class FilesystemError(MdTailwindError):
    """Raised when a scratch artifact cannot be written."""


class InsertionPointError(MdTailwindError):
    """Raised when the rendered HTML has neither the CSS marker nor </head>."""
