"""Tailwind output formats: pre- and post-render hooks around an HTML render."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .build.orchestrator import PostRenderPipeline
from .core.models import BuildOptions, RenderRequest
from .rendering.hooks import HookList, format_hooks

logger = logging.getLogger(__name__)


class TailwindFormat:
    """HTML output format styled with Tailwind CSS.

    With ``self_contained`` the page is post-processed by PostCSS (Node/npm
    required) and the compiled CSS is embedded as a data URI; ``slim_css``
    prunes classes not used in the final page. Otherwise the page loads the
    Tailwind just-in-time engine from a CDN and custom CSS/config are inlined.
    """

    name = "tailwind"
    template_name = "tailwind.html"
    compile_always = False
    link_stylesheet = False

    def __init__(self, options: BuildOptions | None = None) -> None:
        self.options = options or BuildOptions()
        self.hooks: HookList = format_hooks()
        self.files_dir: Path | None = None
        self.output_dir: Path | None = None

    def pre_render(
        self,
        metadata: dict[str, Any],
        input_path: Path,
        runtime: str,
        knit_meta: Any,
        files_dir: Path,
        output_dir: Path,
    ) -> None:
        self.files_dir = Path(files_dir)
        self.output_dir = Path(output_dir)

    def resolved_options(self, input_path: Path) -> BuildOptions:
        return self.options.resolved(Path(input_path).resolve().parent)

    def post_render(
        self,
        metadata: dict[str, Any],
        input_path: Path,
        output_path: Path,
        clean: bool,
        verbose: bool,
    ) -> Path:
        output_path = Path(output_path)
        output_dir = self.output_dir or output_path.parent
        request = RenderRequest(
            input_path=Path(input_path),
            output_path=output_path,
            files_dir=self.files_dir or output_dir,
            output_dir=output_dir,
        )
        if verbose:
            logger.info(f"Post-processing {output_path} with {self.name}")

        pipeline = PostRenderPipeline(
            request,
            self.resolved_options(input_path),
            compile_always=self.compile_always,
            link_stylesheet=self.link_stylesheet,
        )
        return pipeline.run()


class TailwindProseFormat(TailwindFormat):
    """Tailwind with the Typography plugin, always compiled with PostCSS.

    The compiled stylesheet is linked as ``tailwind_compiled.css`` next to the
    page and kept on cleanup. Templates should wrap content in
    ``<article class="prose">``.
    """

    name = "tailwind_prose"
    template_name = "tailwind_prose.html"
    compile_always = True
    link_stylesheet = True


def tailwind(**options: Any) -> TailwindFormat:
    return TailwindFormat(BuildOptions(**options))


def tailwind_prose(**options: Any) -> TailwindProseFormat:
    return TailwindProseFormat(BuildOptions(**options))


FORMATS: dict[str, type[TailwindFormat]] = {
    TailwindFormat.name: TailwindFormat,
    TailwindProseFormat.name: TailwindProseFormat,
}
