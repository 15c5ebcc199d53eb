"""Jinja2 template loading for boilerplate files and page skeletons."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def _environment(search_path: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(search_path)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def load_template(template_path: Path) -> Template:
    """Load a Jinja2 template from a file path.

    Args:
        template_path: Path to the template file

    Returns:
        Compiled Jinja2 template
    """
    if not template_path.exists():
        raise FileNotFoundError(f"Template not found: {template_path}")

    # Use template's parent directory as loader search path
    env = _environment(template_path.parent)
    return env.get_template(template_path.name)


def builtin_template(name: str) -> Template:
    """Load one of the templates shipped with the package."""
    return load_template(TEMPLATES_DIR / f"{name}.j2")


def render_builtin(name: str, **context: Any) -> str:
    logger.debug(f"Rendering built-in template: {name}")
    return builtin_template(name).render(**context)
