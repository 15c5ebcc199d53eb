"""Domain models for a single render and its build configuration."""

from __future__ import annotations

import base64
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pygments.styles import get_all_styles

from .errors import ExternalToolError

SEED_CSS = "tailwind_prose.css"
FRAMEWORK_CONFIG = "tailwind.config.js"
PROCESSOR_CONFIG = "postcss.config.js"
COMPILED_CSS = "tailwind_compiled.css"


class RenderRequest(BaseModel):
    """Paths describing one document render."""

    model_config = ConfigDict(frozen=True)

    input_path: Path = Field(..., description="Source Markdown document")
    output_path: Path = Field(..., description="Rendered HTML document")
    files_dir: Path = Field(..., description="Directory holding auxiliary assets")
    output_dir: Path = Field(..., description="Directory where artifacts land")

    def artifact_path(self, name: str) -> Path:
        return self.output_dir / name


class BuildOptions(BaseModel):
    """Options recognised by the Tailwind output formats.

    Field names match the document front matter keys. Relative paths are
    resolved later against the input document's directory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    highlight: str | None = Field(default="zenburn", description="Pygments style")
    slim_css: bool = Field(default=False, description="Prune unused utility classes")
    self_contained: bool = Field(
        default=True, description="Compile locally and embed CSS as a data URI"
    )
    css: list[Path] = Field(default_factory=list, description="Extra stylesheets")
    tailwind_config: Path | None = Field(default=None, description="Tailwind config")
    clean_supporting: bool = Field(
        default=True, description="Remove intermediate artifacts after use"
    )
    template: Path | None = Field(default=None, description="Custom page template")

    @field_validator("highlight", mode="before")
    @classmethod
    def _normalize_highlight(cls, value: object) -> object:
        if isinstance(value, str) and value.strip().lower() in {"", "none", "null"}:
            return None
        return value

    @field_validator("highlight")
    @classmethod
    def _known_style(cls, value: str | None) -> str | None:
        if value is not None and value not in set(get_all_styles()):
            raise ValueError(f"Unknown highlight style: {value!r}")
        return value

    @field_validator("css", mode="before")
    @classmethod
    def _css_as_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, (str, Path)):
            return [value]
        return value

    @property
    def keep_intermediate_artifacts(self) -> bool:
        return not self.clean_supporting

    def resolved(self, base_dir: Path) -> BuildOptions:
        """Return a copy with relative paths anchored at ``base_dir``."""

        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else base_dir / path

        return self.model_copy(
            update={
                "css": [anchor(p) for p in self.css],
                "tailwind_config": anchor(self.tailwind_config)
                if self.tailwind_config is not None
                else None,
                "template": anchor(self.template) if self.template is not None else None,
            }
        )


class ArtifactRole(str, Enum):
    SEED = "seed"
    FRAMEWORK_CONFIG = "framework_config"
    PROCESSOR_CONFIG = "processor_config"
    COMPILED = "compiled"


class ScratchArtifact(BaseModel):
    """A file in the output directory used while compiling the stylesheet."""

    model_config = ConfigDict(frozen=True)

    path: Path
    role: ArtifactRole
    generated: bool = Field(..., description="Written by this render")


class CompiledOutput(BaseModel):
    """Where the Tailwind CSS for a render lives.

    Exactly one of ``stylesheet`` (compile mode) or ``fragment`` (reference
    mode) is set.
    """

    stylesheet: Path | None = None
    embed: bool = True
    fragment: str | None = None

    @model_validator(mode="after")
    def _one_location(self) -> CompiledOutput:
        if (self.stylesheet is None) == (self.fragment is None):
            raise ValueError("Exactly one of stylesheet or fragment must be set")
        return self

    def read_stylesheet(self) -> bytes:
        if self.stylesheet is None:
            raise ExternalToolError("No compiled stylesheet for a reference-mode render")
        try:
            data = self.stylesheet.read_bytes()
        except OSError as exc:
            raise ExternalToolError(
                f"Compiled stylesheet could not be read: {self.stylesheet}"
            ) from exc
        if not data.strip():
            raise ExternalToolError(f"Compiled stylesheet is empty: {self.stylesheet}")
        return data

    def to_html(self) -> str:
        if self.fragment is not None:
            return self.fragment
        data = self.read_stylesheet()
        if self.embed:
            encoded = base64.b64encode(data).decode("ascii")
            return f'<link href="data:text/css;base64,{encoded}" rel="stylesheet"/>'
        return f'<link rel="stylesheet" href="{self.stylesheet.name}" type="text/css"/>'


class BuildResult(BaseModel):
    output: CompiledOutput
    artifacts: list[ScratchArtifact] = Field(default_factory=list)


class RenderStage(str, Enum):
    IDLE = "idle"
    MATERIALIZING = "materializing"
    COMPILING = "compiling"
    BUILDING_REFERENCE = "building_reference"
    SPLICING = "splicing"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (RenderStage.DONE, RenderStage.FAILED)
