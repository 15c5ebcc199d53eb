"""Process-wide render hook registry and the Tailwind figure hook.

Hooks are kept in named groups. Output formats compute their own hook set
inside ``preserved_hooks()`` so the global registry is left as they found it.
"""

from __future__ import annotations

import copy
import html
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator
from xml.etree import ElementTree as ET

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

logger = logging.getLogger(__name__)

HookList = dict[str, dict[str, Any]]
FigureHook = Callable[..., str]

HOOK_GROUPS = ("render_hooks", "chunk_options")

_registry: HookList = {name: {} for name in HOOK_GROUPS}


def plain_figure(
    src: str,
    caption: str = "",
    width: str | None = None,
    height: str | None = None,
    base_dir: Path | None = None,
) -> str:
    return f'<p><img src="{html.escape(src)}" alt="{html.escape(caption)}"/></p>'


def render_figure(
    src: str,
    caption: str = "",
    width: str | None = None,
    height: str | None = None,
    base_dir: Path | None = None,
) -> str:
    """Render an image as ``<figure>`` with a caption.

    SVG files that exist on disk are inlined into the figure.
    """
    declarations = []
    if width:
        declarations.append(f"width: {width}")
    if height:
        declarations.append(f"height: {height}")
    style = "; ".join(declarations)
    style_attr = f' style="{html.escape(style)}"' if style else ""
    figcaption = f"<figcaption>{html.escape(caption)}</figcaption>"

    if src.lower().endswith(".svg"):
        svg_path = Path(src)
        if base_dir is not None and not svg_path.is_absolute():
            svg_path = base_dir / svg_path
        if svg_path.exists():
            svg = "".join(svg_path.read_text(encoding="utf-8").splitlines())
            return f"<figure><div{style_attr}>{svg}</div>{figcaption}</figure>"
        logger.warning(f"SVG figure not found, linking instead: {svg_path}")

    img = (
        f'<img src="{html.escape(src)}" alt="{html.escape(caption)}"{style_attr}/>'
    )
    return f"<figure>{img}{figcaption}</figure>"


def get_hook_list(hook_names: tuple[str, ...] | None = None) -> HookList:
    """Snapshot the named hook groups (all groups by default)."""
    names = hook_names or HOOK_GROUPS
    return {name: copy.copy(_registry[name]) for name in names}


def set_hook_list(hook_list: HookList) -> None:
    for name, hooks in hook_list.items():
        _registry[name] = copy.copy(hooks)


def reset_default_hooks() -> None:
    """Install the default Markdown hooks, replacing whatever is registered."""
    set_hook_list(
        {
            "render_hooks": {"figure": plain_figure},
            "chunk_options": {"fig_width": 8, "fig_height": 4},
        }
    )


@contextmanager
def preserved_hooks() -> Iterator[HookList]:
    """Capture the registry and restore it on exit, even after an error."""
    saved = get_hook_list()
    try:
        yield saved
    finally:
        set_hook_list(saved)


def format_hooks() -> HookList:
    """Default hooks with the Tailwind figure hook, for one output format."""
    with preserved_hooks():
        reset_default_hooks()
        hooks = get_hook_list()
    hooks["render_hooks"]["figure"] = render_figure
    return hooks


class FigureProcessor(Treeprocessor):
    def __init__(self, md: Markdown, hook: FigureHook, base_dir: Path | None):
        super().__init__(md)
        self.hook = hook
        self.base_dir = base_dir

    def run(self, root: ET.Element) -> None:
        for p in list(root.iter("p")):
            children = list(p)
            if len(children) != 1 or children[0].tag != "img":
                continue
            img = children[0]
            if (p.text or "").strip() or (img.tail or "").strip():
                continue
            markup = self.hook(
                img.get("src", ""),
                img.get("alt", ""),
                img.get("width"),
                img.get("height"),
                self.base_dir,
            )
            p.remove(img)
            p.text = self.md.htmlStash.store(markup)


class FigureExtension(Extension):
    """Render standalone images through a figure hook."""

    def __init__(self, **kwargs: Any) -> None:
        self.config = {
            "hook": [render_figure, "Callable producing figure HTML"],
            "base_dir": ["", "Directory relative image paths resolve against"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        base_dir = self.getConfig("base_dir")
        processor = FigureProcessor(
            md, hook=self.getConfig("hook"), base_dir=Path(base_dir) if base_dir else None
        )
        md.treeprocessors.register(processor, "tailwind_figures", priority=15)


reset_default_hooks()
