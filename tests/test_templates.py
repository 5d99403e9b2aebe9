"""Tests for the Jinja2 engine (native file rendering)."""

from __future__ import annotations

import pytest

from tplconsolidate import CompileError, Consolidator, ReadError, RenderError


def _render(consolidator, path, **options):
    return consolidator.render_sync("jinja2", path, options)


def test_render_from_file(tmp_path):
    (tmp_path / "test.txt").write_text("Hello {{ name }}!")

    consolidator = Consolidator()
    assert _render(consolidator, tmp_path / "test.txt", name="World").output == "Hello World!"


def test_include_from_template_dir(tmp_path):
    (tmp_path / "header.txt").write_text("[{{ title }}]")
    (tmp_path / "page.txt").write_text("{% include 'header.txt' %} body")

    result = _render(Consolidator(), tmp_path / "page.txt", title="T")
    assert result.output == "[T] body"


def test_include_falls_back_to_views(tmp_path):
    views = tmp_path / "views"
    views.mkdir()
    (views / "layout.txt").write_text("<{% block content %}{% endblock %}>")
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "page.txt").write_text(
        "{% extends 'layout.txt' %}{% block content %}{{ x }}{% endblock %}"
    )

    result = _render(Consolidator(), pages / "page.txt", x="val", settings={"views": str(views)})
    assert result.output == "<val>"


def test_missing_template_is_read_error(tmp_path):
    result = _render(Consolidator(), tmp_path / "nonexistent.txt")
    assert isinstance(result.error, ReadError)


def test_syntax_error_is_compile_error(tmp_path):
    (tmp_path / "bad.txt").write_text("{% if %}")
    result = _render(Consolidator(), tmp_path / "bad.txt")
    assert isinstance(result.error, CompileError)


def test_runtime_error_is_render_error(tmp_path):
    (tmp_path / "div.txt").write_text("{{ x // y }}")
    result = _render(Consolidator(), tmp_path / "div.txt", x=1, y=0)
    assert isinstance(result.error, RenderError)


def test_jinja_conditionals(tmp_path):
    (tmp_path / "cond.txt").write_text(
        "{% if include_methods %}Methods: {{ methods }}{% endif %}"
    )

    consolidator = Consolidator()
    path = tmp_path / "cond.txt"
    assert _render(consolidator, path, include_methods=True, methods="RCT").output == "Methods: RCT"
    assert _render(consolidator, path, include_methods=False, methods="RCT").output == ""


def test_jinja_loops(tmp_path):
    (tmp_path / "loop.txt").write_text(
        "{% for item in items %}- {{ item }}\n{% endfor %}"
    )

    result = _render(Consolidator(), tmp_path / "loop.txt", items=["a", "b", "c"])
    assert "- a" in result.output
    assert "- c" in result.output


def test_cached_environment_serves_stale_template(tmp_path):
    path = tmp_path / "page.txt"
    path.write_text("v1")

    consolidator = Consolidator()
    assert _render(consolidator, path, cache=True).output == "v1"
    path.write_text("v2 with different length")
    assert _render(consolidator, path, cache=True).output == "v1"
    # Jinja2 keeps its own cache; the shared source cache is not used
    assert len(consolidator.cache) == 0


def test_filename_visible_to_template(tmp_path):
    path = tmp_path / "name.txt"
    path.write_text("{{ filename }}")
    assert _render(Consolidator(), path).output == str(path)


@pytest.mark.asyncio
async def test_engine_loaded_once(tmp_path):
    path = tmp_path / "p.txt"
    path.write_text("x")
    consolidator = Consolidator()

    await consolidator.render("jinja2", path)
    await consolidator.render("jinja2", path)
    assert consolidator.registry.load_count == 1


def test_environment_cache_is_bounded(tmp_path, monkeypatch):
    from tplconsolidate.engines import jinja

    monkeypatch.setattr(jinja, "MAX_ENVIRONMENTS", 3)
    consolidator = Consolidator()
    for i in range(6):
        d = tmp_path / f"dir{i}"
        d.mkdir()
        (d / "page.txt").write_text(str(i))
        assert _render(consolidator, d / "page.txt").output == str(i)

    engine = consolidator.registry.resolve("jinja2")
    assert len(engine._environments) == 3
    assert (str(tmp_path / "dir5"),) in [key[0] for key in engine._environments]
    assert (str(tmp_path / "dir0"),) not in [key[0] for key in engine._environments]
