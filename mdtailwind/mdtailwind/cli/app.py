"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..core.errors import MdTailwindError
from ..formats import FORMATS
from ..html.reference import use_tailwind
from ..rendering import engine
from .parsers import build_overrides, parse_format, parse_highlight

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mdtailwind",
    help="Render Markdown to HTML styled with Tailwind CSS.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


@app.command()
def render(
    input_path: Annotated[
        Path,
        typer.Argument(help="Markdown document to render.", metavar="INPUT"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML output path (default: INPUT.html)."),
    ] = None,
    format_name: Annotated[
        Optional[str],
        typer.Option(
            "--format",
            "-f",
            help="Output format: tailwind or tailwind_prose (default: front matter).",
        ),
    ] = None,
    self_contained: Annotated[
        Optional[bool],
        typer.Option(
            "--self-contained/--no-self-contained",
            help="Compile CSS with PostCSS and embed it, or load Tailwind from the CDN.",
            show_default=False,
        ),
    ] = None,
    slim_css: Annotated[
        Optional[bool],
        typer.Option(
            "--slim-css/--no-slim-css",
            help="Only keep utility classes used in the page.",
            show_default=False,
        ),
    ] = None,
    css: Annotated[
        list[Path],
        typer.Option("--css", help="Custom stylesheet (may use @apply). Repeatable."),
    ] = [],
    tailwind_config: Annotated[
        Optional[Path],
        typer.Option("--tailwind-config", help="Custom Tailwind configuration file."),
    ] = None,
    keep_supporting: Annotated[
        bool,
        typer.Option("--keep-supporting", help="Keep intermediate build files."),
    ] = False,
    template: Annotated[
        Optional[Path],
        typer.Option("--template", help="Custom Jinja2 page template."),
    ] = None,
    highlight: Annotated[
        Optional[str],
        typer.Option("--highlight", help="Pygments style, or 'none' to disable."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Render a Markdown document with a Tailwind output format."""
    _configure_logging(verbose)

    overrides = build_overrides(
        self_contained=self_contained,
        slim_css=slim_css,
        css=css,
        tailwind_config=tailwind_config,
        keep_supporting=keep_supporting,
        template=template,
        highlight=parse_highlight(highlight),
    )
    name = parse_format(format_name)

    try:
        output_path = engine.render(
            input_path,
            output,
            overrides=overrides,
            format_name=name,
            verbose=verbose,
        )
    except (MdTailwindError, ValidationError, ValueError, OSError) as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    typer.echo(str(output_path))


@app.command()
def snippet(
    css: Annotated[
        list[Path],
        typer.Option("--css", help="Stylesheet to inline (may use @apply). Repeatable."),
    ] = [],
    tailwind_config: Annotated[
        Optional[Path],
        typer.Option(
            "--tailwind-config",
            help="JS file defining window.tailwindConfig and calling window.tailwindCSS.refresh().",
        ),
    ] = None,
) -> None:
    """Print HTML that loads Tailwind from the just-in-time CDN."""
    try:
        typer.echo(use_tailwind(css, tailwind_config), nl=False)
    except MdTailwindError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("formats")
def list_formats() -> None:
    """List the available output formats."""
    for name, cls in FORMATS.items():
        summary = (cls.__doc__ or "").strip().splitlines()[0]
        typer.echo(f"{name:16} {summary}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
