"""CDN reference mode: load the Tailwind JIT engine in the browser."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..core.errors import MissingInputError
from ..rendering.templating import render_builtin
from ..settings import get_settings

logger = logging.getLogger(__name__)


def check_inputs(css: Sequence[Path] | None, tailwind_config: Path | None) -> None:
    """Fail fast on stylesheet or config paths that do not exist."""
    for path in css or []:
        if not Path(path).exists():
            raise MissingInputError(Path(path))
    if tailwind_config is not None and not Path(tailwind_config).exists():
        raise MissingInputError(Path(tailwind_config))


def use_tailwind(
    css: Sequence[Path] | None = None, tailwind_config: Path | None = None
) -> str:
    """Build the HTML that loads Tailwind from the just-in-time CDN.

    Custom stylesheets may use ``@apply``; they are inlined as
    ``<style type='postcss'>`` blocks and compiled in the browser. A custom
    config must assign ``window.tailwindConfig`` and then call
    ``window.tailwindCSS.refresh()``.

    Args:
        css: Stylesheet files, inlined in order
        tailwind_config: JavaScript file defining ``window.tailwindConfig``

    Returns:
        HTML fragment
    """
    check_inputs(css, tailwind_config)

    config = (
        Path(tailwind_config).read_text(encoding="utf-8").rstrip("\n")
        if tailwind_config is not None
        else None
    )
    stylesheets = [Path(p).read_text(encoding="utf-8").rstrip("\n") for p in css or []]
    logger.debug(
        f"Reference fragment: config={'yes' if config is not None else 'no'}, "
        f"{len(stylesheets)} stylesheet(s)"
    )

    return render_builtin(
        "reference.html",
        cdn_url=get_settings().cdn_url,
        config=config,
        stylesheets=stylesheets,
    )
