"""Tests for npm/PostCSS invocation with subprocess replaced."""

from __future__ import annotations

import subprocess

import pytest

from mdtailwind.build import toolchain
from mdtailwind.core.errors import ExternalToolError
from mdtailwind.settings import Settings


@pytest.fixture
def settings():
    return Settings(
        npm_command="npm",
        postcss_command=["npx", "postcss"],
        node_packages=["tailwindcss", "autoprefixer"],
        compile_timeout=5,
    )


@pytest.fixture(autouse=True)
def npm_on_path(monkeypatch):
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: f"/usr/bin/{name}")


def test_run_logged_raises_on_failure(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 2, stdout="", stderr="bad config")

    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

    with pytest.raises(ExternalToolError) as excinfo:
        toolchain.run_logged(["postcss"], capture_output=True, echo="never")

    assert excinfo.value.returncode == 2
    assert excinfo.value.stderr == "bad config"


def test_run_logged_timeout(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

    with pytest.raises(ExternalToolError, match="timed out"):
        toolchain.run_logged(["postcss"], timeout=1)


def test_missing_npm_is_reported(monkeypatch, tmp_path, settings):
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: None)

    with pytest.raises(ExternalToolError, match="missing dependency: npm"):
        toolchain.ensure_node_packages(tmp_path, settings)


def test_only_missing_packages_are_installed(monkeypatch, tmp_path, settings):
    commands = []

    def fake_run(cmd, **kwargs):
        commands.append(cmd)
        installed = cmd[1] == "list" and cmd[2] == "tailwindcss"
        code = 0 if installed or cmd[1] == "install" else 1
        return subprocess.CompletedProcess(cmd, code, stdout="", stderr="")

    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

    installed = toolchain.ensure_node_packages(tmp_path, settings)

    assert installed == ["autoprefixer"]
    assert ["npm", "install", "autoprefixer@latest"] in commands
    assert ["npm", "install", "tailwindcss@latest"] not in commands


def test_compile_feeds_sources_in_order(monkeypatch, tmp_path, settings):
    seed = tmp_path / "tailwind_prose.css"
    seed.write_text("@tailwind base;", encoding="utf-8")
    extra = tmp_path / "style.css"
    extra.write_text(".btn { @apply font-bold; }", encoding="utf-8")
    output = tmp_path / "tailwind_compiled.css"
    seen = {}

    def fake_run(cmd, **kwargs):
        seen.update(cmd=cmd, **kwargs)
        output.write_text(".btn{font-weight:700}", encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

    assert toolchain.compile_stylesheet([seed, extra], output, settings) == output
    assert seen["cmd"] == ["npx", "postcss", "-o", "tailwind_compiled.css"]
    assert seen["input"] == "@tailwind base;\n.btn { @apply font-bold; }"
    assert seen["cwd"] == str(tmp_path)
    assert seen["timeout"] == 5


def test_compile_without_output_is_an_error(monkeypatch, tmp_path, settings):
    seed = tmp_path / "tailwind_prose.css"
    seed.write_text("@tailwind base;", encoding="utf-8")

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

    with pytest.raises(ExternalToolError, match="no output"):
        toolchain.compile_stylesheet([seed], tmp_path / "tailwind_compiled.css", settings)
