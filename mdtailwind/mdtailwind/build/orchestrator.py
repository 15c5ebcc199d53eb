"""Post-render pipeline: build the Tailwind CSS and splice it into the page."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.models import (
    COMPILED_CSS,
    ArtifactRole,
    BuildOptions,
    BuildResult,
    CompiledOutput,
    RenderRequest,
    RenderStage,
    ScratchArtifact,
)
from ..html.reference import check_inputs, use_tailwind
from ..html.splicer import splice
from ..rendering.io import read_lines, write_lines
from ..settings import Settings, get_settings
from . import toolchain
from .cleaner import cleanup
from .materializer import materialize

logger = logging.getLogger(__name__)


class PostRenderPipeline:
    """Runs the build, splice and cleanup steps for one rendered document.

    Args:
        request: Paths of the render being post-processed
        options: Build options with paths already resolved
        compile_always: Compile locally even when ``self_contained`` is off
        link_stylesheet: Link the compiled CSS instead of embedding it
        settings: Toolchain settings (defaults to environment settings)
    """

    def __init__(
        self,
        request: RenderRequest,
        options: BuildOptions,
        *,
        compile_always: bool = False,
        link_stylesheet: bool = False,
        settings: Settings | None = None,
    ) -> None:
        self.request = request
        self.options = options
        self.compile_always = compile_always
        self.link_stylesheet = link_stylesheet
        self.settings = settings or get_settings()
        self.stage = RenderStage.IDLE

    @property
    def compile_mode(self) -> bool:
        return self.compile_always or self.options.self_contained

    def _enter(self, stage: RenderStage) -> None:
        logger.debug(f"{self.request.output_path.name}: {self.stage.value} → {stage.value}")
        self.stage = stage

    def build(self) -> BuildResult:
        """Compile the stylesheet or build the CDN fragment."""
        check_inputs(self.options.css, self.options.tailwind_config)

        if not self.compile_mode:
            self._enter(RenderStage.BUILDING_REFERENCE)
            fragment = use_tailwind(self.options.css, self.options.tailwind_config)
            return BuildResult(output=CompiledOutput(fragment=fragment))

        self._enter(RenderStage.MATERIALIZING)
        artifacts = materialize(self.request, self.options)
        seed = next(a.path for a in artifacts if a.role is ArtifactRole.SEED)

        self._enter(RenderStage.COMPILING)
        output_dir = self.request.output_dir
        toolchain.ensure_node_packages(output_dir, self.settings)
        compiled_path = output_dir / COMPILED_CSS
        toolchain.compile_stylesheet(
            [seed, *self.options.css], compiled_path, self.settings
        )

        # The compiler rewrites this file every run; a linked one is part of the page.
        artifacts.append(
            ScratchArtifact(
                path=compiled_path,
                role=ArtifactRole.COMPILED,
                generated=not self.link_stylesheet,
            )
        )
        output = CompiledOutput(stylesheet=compiled_path, embed=not self.link_stylesheet)
        return BuildResult(output=output, artifacts=artifacts)

    def run(self) -> Path:
        """Run every step and return the rewritten output path."""
        output_path = self.request.output_path
        try:
            lines = read_lines(output_path)
            result = self.build()

            self._enter(RenderStage.SPLICING)
            spliced = splice(lines, result.output.to_html(), self.settings.css_marker)
            write_lines(output_path, spliced)

            self._enter(RenderStage.CLEANING_UP)
            cleanup(result.artifacts, self.options.keep_intermediate_artifacts)
        except Exception:
            self._enter(RenderStage.FAILED)
            raise

        self._enter(RenderStage.DONE)
        return output_path


def run(
    request: RenderRequest,
    options: BuildOptions,
    *,
    compile_always: bool = False,
    link_stylesheet: bool = False,
) -> BuildResult:
    """Build the Tailwind output for ``request`` without touching the page."""
    pipeline = PostRenderPipeline(
        request,
        options,
        compile_always=compile_always,
        link_stylesheet=link_stylesheet,
    )
    return pipeline.build()
