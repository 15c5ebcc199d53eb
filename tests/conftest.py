"""Shared fixtures: rendered pages and a fake Node toolchain."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdtailwind.build import toolchain
from mdtailwind.core.models import RenderRequest

PAGE = """<!DOCTYPE html>
<html>
<head>
<title>Doc</title>
<!-- css goes here -->
</head>
<body>
<p class="text-gray-500">Hello</p>
</body>
</html>
"""

COMPILED = ".text-gray-500{color:#6b7280}\n"


@pytest.fixture
def page(tmp_path: Path) -> Path:
    path = tmp_path / "doc.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


@pytest.fixture
def request_for(tmp_path: Path, page: Path) -> RenderRequest:
    return RenderRequest(
        input_path=tmp_path / "doc.md",
        output_path=page,
        files_dir=tmp_path / "doc_files",
        output_dir=tmp_path,
    )


@pytest.fixture
def fake_toolchain(monkeypatch):
    """Replace npm and PostCSS with an in-process stand-in.

    The stand-in records its inputs and writes ``COMPILED`` to the output.
    """
    calls: dict[str, list] = {"ensure": [], "compile": []}

    def fake_ensure(workdir, settings=None):
        calls["ensure"].append(workdir)
        return []

    def fake_compile(sources, output, settings=None):
        calls["compile"].append((list(sources), output))
        output.write_text(COMPILED, encoding="utf-8")
        return output

    monkeypatch.setattr(toolchain, "ensure_node_packages", fake_ensure)
    monkeypatch.setattr(toolchain, "compile_stylesheet", fake_compile)
    return calls
