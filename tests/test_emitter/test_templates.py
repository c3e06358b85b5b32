"""Tests for the Jinja2 renderer (filepacker.emitter.templates)."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from filepacker.emitter.templates import TemplateRenderer, wrap_chunks

pytestmark = pytest.mark.unit


def _renderer_for(tmp_path: Path, source: str) -> TemplateRenderer:
    (tmp_path / "snippet.j2").write_text(source, encoding="utf-8")
    return TemplateRenderer(tmp_path)


class TestTemplateRenderer:
    def test_default_directory_holds_generator_templates(self, renderer: TemplateRenderer):
        for name in ("FileHandler.cs.j2", "PluginFiles.resx.j2", "PluginFiles.Designer.cs.j2"):
            assert (renderer.template_dir / name).is_file()

    def test_cs_string_filter(self, tmp_path: Path):
        renderer = _renderer_for(tmp_path, "{{ p | cs_string }}")
        assert renderer.render("snippet.j2", {"p": 'a"b'}) == '"a\\"b"'

    def test_markup_characters_not_escaped(self, tmp_path: Path):
        renderer = _renderer_for(tmp_path, "{{ a }} => {{ b }}")
        rendered = renderer.render("snippet.j2", {"a": '"<x>"', "b": "a && b's"})
        assert rendered == '"<x>" => a && b\'s'

    def test_wrap_filter(self, tmp_path: Path):
        renderer = _renderer_for(tmp_path, "{% for c in v | wrap(3) %}[{{ c }}]{% endfor %}")
        assert renderer.render("snippet.j2", {"v": "abcdefg"}) == "[abc][def][g]"

    def test_trailing_newline_kept(self, tmp_path: Path):
        renderer = _renderer_for(tmp_path, "x\n")
        assert renderer.render("snippet.j2", {}) == "x\n"

    def test_undefined_variable_raises(self, tmp_path: Path):
        renderer = _renderer_for(tmp_path, "{{ missing }}")
        with pytest.raises(UndefinedError):
            renderer.render("snippet.j2", {})


class TestWrapChunks:
    def test_default_width(self):
        chunks = wrap_chunks("a" * 170)
        assert [len(c) for c in chunks] == [80, 80, 10]

    def test_empty(self):
        assert wrap_chunks("") == []
