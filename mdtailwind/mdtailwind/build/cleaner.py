"""Removal of intermediate artifacts once the page has been written."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..core.models import ScratchArtifact

logger = logging.getLogger(__name__)


def cleanup(artifacts: Iterable[ScratchArtifact], keep_intermediate: bool) -> list[Path]:
    """Delete artifacts this render generated, unless asked to keep them.

    Files not written by this render (pre-existing or user-supplied) are
    never deleted. Already-missing files are ignored.

    Returns:
        Paths that were removed
    """
    if keep_intermediate:
        logger.debug("Keeping intermediate artifacts")
        return []

    removed: list[Path] = []
    seen: set[Path] = set()
    for artifact in artifacts:
        path = artifact.path.resolve()
        if not artifact.generated or path in seen:
            continue
        seen.add(path)
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed.append(path)
        logger.debug(f"Removed {path}")
    return removed
