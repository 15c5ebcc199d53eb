"""Tests for the command-line interface."""

from __future__ import annotations

from typer.testing import CliRunner

from mdtailwind.cli.app import app

runner = CliRunner()


def test_render_reference_mode(tmp_path):
    source = tmp_path / "doc.md"
    source.write_text("---\ntitle: Hi\n---\n\nHello *world*\n", encoding="utf-8")

    result = runner.invoke(app, ["render", str(source), "--no-self-contained"])

    assert result.exit_code == 0, result.output
    html = (tmp_path / "doc.html").read_text(encoding="utf-8")
    assert "<em>world</em>" in html
    assert "tailwindcss-jit-cdn" in html


def test_render_prose_format_with_output(tmp_path, fake_toolchain):
    source = tmp_path / "doc.md"
    source.write_text("Hello", encoding="utf-8")
    target = tmp_path / "site" / "index.html"

    result = runner.invoke(
        app, ["render", str(source), "-o", str(target), "--format", "tailwind_prose"]
    )

    assert result.exit_code == 0, result.output
    html = target.read_text(encoding="utf-8")
    assert 'class="prose' in html
    assert 'href="tailwind_compiled.css"' in html
    assert (target.parent / "tailwind_compiled.css").exists()


def test_render_missing_css_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "doc.md"
    source.write_text("Hello", encoding="utf-8")

    result = runner.invoke(
        app, ["render", str(source), "--no-self-contained", "--css", "missing.css"]
    )

    assert result.exit_code == 1
    assert not (tmp_path / "doc.html").exists()


def test_render_css_option_is_relative_to_working_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "style.css").write_text(".note { @apply text-red-500; }\n", encoding="utf-8")
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "a.md").write_text("Hello", encoding="utf-8")

    result = runner.invoke(
        app, ["render", "docs/a.md", "--no-self-contained", "--css", "style.css"]
    )

    assert result.exit_code == 0, result.output
    html = (docs / "a.html").read_text(encoding="utf-8")
    assert ".note { @apply text-red-500; }" in html


def test_front_matter_css_is_relative_to_document(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "local.css").write_text(".local {}\n", encoding="utf-8")
    (docs / "a.md").write_text(
        "---\noutput:\n  tailwind:\n    css: local.css\n---\n\nHello\n", encoding="utf-8"
    )

    result = runner.invoke(app, ["render", "docs/a.md", "--no-self-contained"])

    assert result.exit_code == 0, result.output
    assert ".local {}" in (docs / "a.html").read_text(encoding="utf-8")


def test_render_unknown_format(tmp_path):
    source = tmp_path / "doc.md"
    source.write_text("Hello", encoding="utf-8")

    result = runner.invoke(app, ["render", str(source), "--format", "pdf"])

    assert result.exit_code != 0


def test_snippet(tmp_path):
    config = tmp_path / "config.js"
    config.write_text("window.tailwindConfig = {};\nwindow.tailwindCSS.refresh();\n")

    result = runner.invoke(app, ["snippet", "--tailwind-config", str(config)])

    assert result.exit_code == 0
    assert "<script type='module'>" in result.stdout
    assert "window.tailwindCSS.refresh();" in result.stdout


def test_snippet_missing_file(tmp_path):
    result = runner.invoke(app, ["snippet", "--css", str(tmp_path / "x.css")])

    assert result.exit_code == 1


def test_formats_lists_both():
    result = runner.invoke(app, ["formats"])

    assert result.exit_code == 0
    assert "tailwind " in result.stdout
    assert "tailwind_prose" in result.stdout
