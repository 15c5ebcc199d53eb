"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from ..formats import FORMATS


def parse_format(value: str | None) -> str | None:
    """Validate an output format name."""
    if value is None:
        return None
    if value not in FORMATS:
        choices = ", ".join(sorted(FORMATS))
        raise typer.BadParameter(f"Unknown format {value!r}; choose from: {choices}")
    return value


def parse_highlight(value: str | None) -> str | None:
    """Map 'none' to disabled highlighting; other values pass through."""
    if value is None:
        return None
    return "none" if value.strip().lower() in {"none", "null", "off"} else value


def build_overrides(
    *,
    self_contained: bool | None,
    slim_css: bool | None,
    css: list[Path],
    tailwind_config: Path | None,
    keep_supporting: bool,
    template: Path | None,
    highlight: str | None,
) -> dict[str, Any]:
    """Collect only the options given on the command line.

    Paths are made absolute against the current directory; relative paths
    from front matter are later anchored at the document's directory.
    """
    overrides: dict[str, Any] = {}
    if self_contained is not None:
        overrides["self_contained"] = self_contained
    if slim_css is not None:
        overrides["slim_css"] = slim_css
    if css:
        overrides["css"] = [path.resolve() for path in css]
    if tailwind_config is not None:
        overrides["tailwind_config"] = tailwind_config.resolve()
    if keep_supporting:
        overrides["clean_supporting"] = False
    if template is not None:
        overrides["template"] = template.resolve()
    if highlight is not None:
        overrides["highlight"] = highlight
    return overrides
