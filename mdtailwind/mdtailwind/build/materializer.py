"""Boilerplate files needed by the PostCSS/Tailwind toolchain."""

from __future__ import annotations

import filecmp
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from ..core.errors import FilesystemError
from ..core.models import (
    FRAMEWORK_CONFIG,
    PROCESSOR_CONFIG,
    SEED_CSS,
    ArtifactRole,
    BuildOptions,
    RenderRequest,
    ScratchArtifact,
)
from ..rendering.io import atomic_write_text
from ..rendering.templating import render_builtin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PruneConfig:
    """Tailwind config that only keeps classes found in ``content``."""

    content: list[str] = field(default_factory=list)

    def render(self) -> str:
        return render_builtin("tailwind.config.prune.js", content=self.content)


@dataclass(frozen=True)
class FullConfig:
    """Tailwind config that keeps every utility class."""

    def render(self) -> str:
        return render_builtin("tailwind.config.full.js")


ConfigVariant = Union[PruneConfig, FullConfig]


def config_variant(options: BuildOptions, output_path: Path) -> ConfigVariant:
    if options.slim_css:
        return PruneConfig(content=[str(output_path.resolve())])
    return FullConfig()


def seed_stylesheet() -> str:
    return render_builtin("seed.css")


def processor_config() -> str:
    return render_builtin("postcss.config.js")


def same_file(a: Path, b: Path) -> bool:
    """Compare two paths after canonicalizing them."""
    return a.expanduser().resolve() == b.expanduser().resolve()


def ensure_artifact(path: Path, content: str) -> bool:
    """Write ``content`` to ``path`` unless the file already exists.

    Returns:
        True if the file was created, False if an existing file was kept
    """
    if path.exists():
        logger.debug(f"Keeping existing {path}")
        return False
    try:
        atomic_write_text(path, content)
    except OSError as exc:
        raise FilesystemError(f"Could not write {path}: {exc}") from exc
    logger.debug(f"Wrote {path}")
    return True


def install_user_config(source: Path, target: Path) -> bool:
    """Copy a user-supplied Tailwind config to ``target``.

    An existing ``target`` is never overwritten. If it already matches
    ``source`` it is reused as is; any other content is treated as a
    hand-edited config and the build is refused.

    Returns:
        True if a copy was made, False when ``target`` was used as found

    Raises:
        FilesystemError: ``target`` exists with different content, or the
            copy failed
    """
    if same_file(source, target):
        logger.debug(f"Using Tailwind config in place: {target}")
        return False
    try:
        if target.exists():
            if filecmp.cmp(source, target, shallow=False):
                logger.debug(f"Keeping existing {target}")
                return False
            raise FilesystemError(
                f"Refusing to overwrite existing {target} with {source}; "
                f"remove it or pass it as the Tailwind config"
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as exc:
        raise FilesystemError(f"Could not copy {source} to {target}: {exc}") from exc
    logger.debug(f"Copied Tailwind config {source} → {target}")
    return True


def materialize(request: RenderRequest, options: BuildOptions) -> list[ScratchArtifact]:
    """Ensure the seed stylesheet and toolchain configs exist in ``output_dir``.

    Args:
        request: Render whose output directory receives the files
        options: Build options (``tailwind_config`` must already be resolved)

    Returns:
        One artifact per file, flagged with whether this call wrote it
    """
    seed_path = request.artifact_path(SEED_CSS)
    framework_path = request.artifact_path(FRAMEWORK_CONFIG)
    processor_path = request.artifact_path(PROCESSOR_CONFIG)

    # The framework config goes first so a refused install leaves nothing behind.
    if options.tailwind_config is not None:
        framework_generated = install_user_config(options.tailwind_config, framework_path)
    else:
        variant = config_variant(options, request.output_path)
        logger.debug(f"Tailwind config variant: {type(variant).__name__}")
        framework_generated = ensure_artifact(framework_path, variant.render())

    return [
        ScratchArtifact(
            path=seed_path,
            role=ArtifactRole.SEED,
            generated=ensure_artifact(seed_path, seed_stylesheet()),
        ),
        ScratchArtifact(
            path=framework_path,
            role=ArtifactRole.FRAMEWORK_CONFIG,
            generated=framework_generated,
        ),
        ScratchArtifact(
            path=processor_path,
            role=ArtifactRole.PROCESSOR_CONFIG,
            generated=ensure_artifact(processor_path, processor_config()),
        ),
    ]
