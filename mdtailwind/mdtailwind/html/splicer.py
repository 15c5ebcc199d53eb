"""Insertion of Tailwind markup into an already-rendered HTML document."""

from __future__ import annotations

import logging

from ..core.errors import InsertionPointError
from ..settings import get_settings

logger = logging.getLogger(__name__)

HEAD_CLOSE = "</head>"


def find_insertion_point(
    lines: list[str], marker: str | None = None, head_close: str = HEAD_CLOSE
) -> int:
    """Return the line index at which new content is inserted.

    The first line containing ``marker`` wins and content goes right after it.
    Without a marker, content goes right before the first ``</head>`` line.
    """
    marker = marker if marker is not None else get_settings().css_marker

    marker_idx: int | None = None
    head_idx: int | None = None
    marker_count = 0
    for idx, line in enumerate(lines):
        if marker in line:
            marker_count += 1
            if marker_idx is None:
                marker_idx = idx
        elif head_idx is None and head_close in line:
            head_idx = idx

    if marker_count > 1:
        logger.warning(
            f"Found {marker_count} '{marker}' markers; using the first (line {marker_idx + 1})"
        )
    if marker_idx is not None:
        return marker_idx + 1
    if head_idx is not None:
        return head_idx
    raise InsertionPointError(
        f"Rendered HTML has neither '{marker}' nor '{head_close}'"
    )


def splice(lines: list[str], content: str, marker: str | None = None) -> list[str]:
    """Return ``lines`` with ``content`` inserted as one block.

    Args:
        lines: Rendered document lines
        content: Markup to insert; may span several lines
        marker: Marker comment to look for (defaults to settings)

    Returns:
        New list of lines; the input list is not modified
    """
    idx = find_insertion_point(lines, marker)
    block = content.splitlines() or [""]
    logger.debug(f"Inserting {len(block)} line(s) at line {idx + 1}")
    return lines[:idx] + block + lines[idx:]
