"""Markdown-to-HTML render driver for the Tailwind output formats."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import markdown
import yaml
from jinja2 import Template
from pygments.formatters import HtmlFormatter

from ..core.errors import MissingInputError
from ..core.models import BuildOptions
from ..formats import FORMATS, TailwindFormat
from ..html.reference import check_inputs
from .hooks import FigureExtension
from .io import atomic_write_text
from .templating import builtin_template, load_template

logger = logging.getLogger(__name__)

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)", re.S)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a leading YAML block from Markdown text.

    Returns:
        Parsed metadata (empty when absent) and the remaining body
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return {}, text
    metadata = yaml.safe_load(match.group(1)) or {}
    if not isinstance(metadata, dict):
        raise ValueError("Front matter must be a YAML mapping")
    return metadata, text[match.end():]


def format_from_metadata(
    metadata: dict[str, Any],
    overrides: dict[str, Any] | None = None,
    name: str | None = None,
) -> TailwindFormat:
    """Pick the output format and its options from document front matter.

    Accepts ``output: tailwind`` or ``output: {tailwind_prose: {...}}``.
    ``name`` forces a format; ``overrides`` (e.g. from the command line) win
    over front matter options.
    """
    output = metadata.get("output") or TailwindFormat.name
    options: dict[str, Any] = {}
    if isinstance(output, str):
        name = name or output
    elif isinstance(output, dict):
        known = [key for key in output if key in FORMATS]
        if name is None:
            if not known:
                raise ValueError(f"No Tailwind output format in front matter: {list(output)}")
            name = known[0]
        options = output.get(name) or {}
    else:
        raise ValueError(f"Invalid 'output' in front matter: {output!r}")

    if name not in FORMATS:
        raise ValueError(f"Unknown output format: {name}")

    merged = {**options, **(overrides or {})}
    return FORMATS[name](BuildOptions(**merged))


def highlight_css(style: str | None) -> str:
    if style is None:
        return ""
    return HtmlFormatter(style=style).get_style_defs(".codehilite")


def markdown_to_html(body: str, fmt: TailwindFormat, base_dir: Path) -> str:
    extensions: list[Any] = ["extra", "toc", "sane_lists"]
    extension_configs: dict[str, Any] = {}
    if fmt.options.highlight is not None:
        extensions.append("codehilite")
        extension_configs["codehilite"] = {"css_class": "codehilite", "guess_lang": False}
    figure_hook = fmt.hooks["render_hooks"]["figure"]
    extensions.append(FigureExtension(hook=figure_hook, base_dir=str(base_dir)))
    return markdown.markdown(
        body, extensions=extensions, extension_configs=extension_configs
    )


def page_template(fmt: TailwindFormat, options: BuildOptions) -> Template:
    if options.template is None:
        return builtin_template(fmt.template_name)
    if not options.template.exists():
        raise MissingInputError(options.template, "Template")
    return load_template(options.template)


def render(
    input_path: Path,
    output_path: Path | None = None,
    fmt: TailwindFormat | None = None,
    overrides: dict[str, Any] | None = None,
    format_name: str | None = None,
    verbose: bool = False,
) -> Path:
    """Render a Markdown document to HTML and run the format's post-render step.

    Args:
        input_path: Markdown source file
        output_path: HTML destination (default: input with ``.html`` suffix)
        fmt: Output format (default: read from front matter)
        overrides: Option values taking precedence over front matter
        format_name: Format to use instead of the one in front matter
        verbose: Log progress at INFO level

    Returns:
        Final HTML path
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise MissingInputError(input_path, "Input")
    output_path = Path(output_path) if output_path else input_path.with_suffix(".html")
    output_dir = output_path.parent
    files_dir = output_dir / f"{input_path.stem}_files"

    metadata, body = split_front_matter(input_path.read_text(encoding="utf-8"))
    if fmt is None:
        fmt = format_from_metadata(metadata, overrides, format_name)

    logger.debug(f"Rendering {input_path} with {fmt.name}")
    fmt.pre_render(metadata, input_path, "static", None, files_dir, output_dir)

    options = fmt.resolved_options(input_path)
    check_inputs(options.css, options.tailwind_config)
    base_dir = input_path.resolve().parent
    page = page_template(fmt, options).render(
        title=metadata.get("title", ""),
        author=metadata.get("author", ""),
        date=metadata.get("date", ""),
        lang=metadata.get("lang", "en"),
        highlight_css=highlight_css(options.highlight),
        body=markdown_to_html(body, fmt, base_dir),
        metadata=metadata,
    )
    atomic_write_text(output_path, page)
    logger.info(f"Rendered {input_path} → {output_path}")

    return fmt.post_render(metadata, input_path, output_path, True, verbose)
