"""Tests for the CDN reference fragment."""

from __future__ import annotations

import pytest

from mdtailwind.core.errors import MissingInputError
from mdtailwind.html.reference import use_tailwind

CONFIG = """window.tailwindConfig = {
    theme: { extend: { colors: { daisy: '#EBC944' } } }
};

window.tailwindCSS.refresh();"""


def test_cdn_only():
    fragment = use_tailwind()

    assert "<script src='https://unpkg.com/tailwindcss-jit-cdn'></script>" in fragment
    assert "type='module'" not in fragment
    assert "<style" not in fragment


def test_config_is_inlined_verbatim(tmp_path):
    config = tmp_path / "tailwind.config.js"
    config.write_text(CONFIG + "\n", encoding="utf-8")

    fragment = use_tailwind(tailwind_config=config)

    assert fragment.count("<script src=") == 1
    assert fragment.count("<script type='module'>") == 1
    assert CONFIG in fragment
    assert "<script type='tailwind-config'>\n window.tailwindConfig\n</script>" in fragment
    assert "<link" not in fragment
    assert fragment.index("type='module'") < fragment.index("type='tailwind-config'")


def test_stylesheets_inlined_in_order(tmp_path):
    first = tmp_path / "btn.css"
    first.write_text(".btn {\n  @apply font-bold py-2 px-4 rounded;\n}\n", encoding="utf-8")
    second = tmp_path / "red.css"
    second.write_text(".btn-red {\n  @apply bg-red-500 text-white;\n}\n", encoding="utf-8")

    fragment = use_tailwind(css=[first, second])

    assert fragment.count("<style type='postcss'>") == 2
    assert fragment.index(".btn {") < fragment.index(".btn-red {")
    assert "@apply font-bold py-2 px-4 rounded;" in fragment


def test_missing_stylesheet_names_path(tmp_path):
    missing = tmp_path / "nope.css"

    with pytest.raises(MissingInputError) as excinfo:
        use_tailwind(css=[missing])

    assert excinfo.value.path == missing
    assert str(missing) in str(excinfo.value)


def test_missing_config(tmp_path):
    with pytest.raises(MissingInputError):
        use_tailwind(tailwind_config=tmp_path / "tailwind.config.js")
