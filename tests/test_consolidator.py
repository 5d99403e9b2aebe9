"""Tests for tplconsolidate.consolidator: the render pipeline end to end."""

from __future__ import annotations

import pytest

import tplconsolidate
from tplconsolidate import (
    CompileError,
    ConsolidateSettings,
    Consolidator,
    EngineLoadError,
    InvalidOptionsError,
    ReadError,
    RenderError,
    RenderOptions,
)
from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.registry import EngineRegistry

from conftest import FakeEngine


class TestRenderPipeline:
    @pytest.mark.asyncio
    async def test_render_flat_options(self, tmp_path, consolidator):
        page = tmp_path / "hello.txt"
        page.write_text("Hello, {{name}}!")

        result = await consolidator.render("fake", str(page), {"name": "Ada", "cache": False})

        assert result.ok
        assert result.output == "Hello, Ada!"
        assert result.engine == "fake"
        assert result.path == str(page)

    @pytest.mark.asyncio
    async def test_filename_set_before_compile(self, tmp_path, consolidator):
        page = tmp_path / "named.txt"
        page.write_text("{{filename}}")

        result = await consolidator.render("fake", page)
        assert result.output == str(page)

    @pytest.mark.asyncio
    async def test_caller_options_not_mutated(self, tmp_path, consolidator):
        page = tmp_path / "p.txt"
        page.write_text("x")
        options = RenderOptions(data={"a": 1})

        await consolidator.render("fake", page, options)
        assert options.filename is None
        assert options.cache is None
        assert options.data == {"a": 1}

    @pytest.mark.asyncio
    async def test_missing_template_is_read_error_without_compile(
        self, tmp_path, consolidator, fake_engine,
    ):
        result = await consolidator.render("fake", tmp_path / "missing.tpl", {})

        assert not result.ok
        assert isinstance(result.error, ReadError)
        assert fake_engine.compiled == []
        assert fake_engine.rendered_partials == []

    @pytest.mark.asyncio
    async def test_compile_exception_becomes_compile_error(
        self, tmp_path, consolidator, fake_engine,
    ):
        page = tmp_path / "bad.txt"
        page.write_text("{{ BROKEN")
        fake_engine.fail_compile_on = "BROKEN"

        result = await consolidator.render("fake", page)

        assert isinstance(result.error, CompileError)
        assert result.error.engine == "fake"
        assert isinstance(result.error.__cause__, SyntaxError)
        assert fake_engine.rendered_partials == []

    @pytest.mark.asyncio
    async def test_render_exception_becomes_render_error(
        self, tmp_path, consolidator, fake_engine,
    ):
        page = tmp_path / "p.txt"
        page.write_text("x")
        fake_engine.fail_render = True

        result = await consolidator.render("fake", page)

        assert isinstance(result.error, RenderError)
        assert isinstance(result.error.__cause__, ZeroDivisionError)
        with pytest.raises(RenderError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_reported(self, tmp_path):
        class Exploding(BaseEngine):
            ENGINE_NAME = "exploding"
            DISPLAY_NAME = "Exploding"
            DESCRIPTION = "raises outside compile/render"
            PACKAGE = ""

            def _load(self):
                return None

            def render(self, template, options, partials):
                return ""

            async def compile_and_render(self, path, options, reader, resolver):
                raise RuntimeError("boom")

        consolidator = Consolidator(registry=EngineRegistry({"exploding": Exploding}))
        result = await consolidator.render("exploding", tmp_path / "x")

        assert isinstance(result.error, RenderError)
        assert "boom" in str(result.error)

    @pytest.mark.asyncio
    async def test_engine_load_failure_is_reported(self, tmp_path, counting_reader):
        def missing_library():
            raise ImportError("nolib package not installed")

        consolidator = Consolidator(
            registry=EngineRegistry({"nolib": missing_library}),
            read_file=counting_reader,
        )
        page = tmp_path / "p.txt"
        page.write_text("x")

        result = await consolidator.render("nolib", page)

        assert isinstance(result.error, EngineLoadError)
        assert counting_reader.calls == []

    @pytest.mark.asyncio
    async def test_unknown_engine(self, tmp_path):
        result = await Consolidator().render("nonexistent_engine", tmp_path / "x")
        assert isinstance(result.error, EngineLoadError)

    @pytest.mark.asyncio
    async def test_bad_partial_policy_is_reported_not_raised(self, tmp_path, consolidator, counting_reader):
        page = tmp_path / "p.txt"
        page.write_text("x")

        result = await consolidator.render("fake", page, {"partial_policy": "nope"})

        assert not result.ok
        assert isinstance(result.error, InvalidOptionsError)
        assert counting_reader.calls == []


class TestEngineReuse:
    @pytest.mark.asyncio
    async def test_engine_loaded_once_across_renders(self, tmp_path):
        loads = []

        def factory():
            loads.append(1)
            return FakeEngine()

        consolidator = Consolidator(registry=EngineRegistry({"fake": factory}))
        page = tmp_path / "p.txt"
        page.write_text("x")

        for _ in range(3):
            assert (await consolidator.render("fake", page)).ok
        assert len(loads) == 1
        assert consolidator.registry.load_count == 1

    def test_engine_info(self, consolidator):
        info = consolidator.engine_info("fake")
        assert info["name"] == "fake"
        assert info["supports_partials"] is True


class TestCaching:
    @pytest.mark.asyncio
    async def test_cache_until_cleared(self, tmp_path, consolidator, counting_reader):
        page = tmp_path / "p.txt"
        page.write_text("v1")
        options = {"cache": True}

        assert (await consolidator.render("fake", page, options)).output == "v1"
        page.write_text("v2")
        assert (await consolidator.render("fake", page, options)).output == "v1"
        assert counting_reader.count(page) == 1

        consolidator.clear_cache()
        assert (await consolidator.render("fake", page, options)).output == "v2"
        assert counting_reader.count(page) == 2

    @pytest.mark.asyncio
    async def test_settings_default_cache(self, tmp_path, fake_engine, counting_reader):
        consolidator = Consolidator(
            ConsolidateSettings(cache=True),
            registry=EngineRegistry({"fake": lambda: fake_engine}),
            read_file=counting_reader,
        )
        page = tmp_path / "p.txt"
        page.write_text("x")

        await consolidator.render("fake", page)
        await consolidator.render("fake", page)
        assert counting_reader.count(page) == 1

        # An explicit per-call value wins over the default
        await consolidator.render("fake", page, {"cache": False})
        assert counting_reader.count(page) == 2

    @pytest.mark.asyncio
    async def test_consolidators_do_not_share_state(self, tmp_path, counting_reader):
        page = tmp_path / "p.txt"
        page.write_text("x")
        first = Consolidator(registry=EngineRegistry({"fake": FakeEngine}), read_file=counting_reader)
        second = Consolidator(registry=EngineRegistry({"fake": FakeEngine}), read_file=counting_reader)

        await first.render("fake", page, {"cache": True})
        await second.render("fake", page, {"cache": True})

        assert counting_reader.count(page) == 2
        assert len(first.cache) == 1
        assert len(second.cache) == 1


class TestRendererBinding:
    @pytest.mark.asyncio
    async def test_renderer_binds_engine(self, tmp_path, consolidator):
        page = tmp_path / "p.txt"
        page.write_text("Hi {{who}}")
        render_fake = consolidator.renderer("fake")

        result = await render_fake(page, {"who": "there"})
        assert result.output == "Hi there"

    def test_render_sync(self, tmp_path, consolidator):
        page = tmp_path / "p.txt"
        page.write_text("sync {{x}}")
        assert consolidator.render_sync("fake", page, {"x": 1}).unwrap() == "sync 1"


class TestModuleApi:
    def test_version(self):
        assert tplconsolidate.version == "0.1.0"
        assert tplconsolidate.__version__ == tplconsolidate.version

    def test_global_singleton(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TPLCONSOLIDATE_ENV", "production")
        tplconsolidate.reset_consolidator()
        try:
            consolidator = tplconsolidate.get_consolidator()
            assert consolidator is tplconsolidate.get_consolidator()
            assert consolidator.settings.cache is True

            page = tmp_path / "p.txt"
            page.write_text("Hello $name")
            result = tplconsolidate.render_sync("string", page, {"name": "Ada"})
            assert result.output == "Hello Ada"
            assert str(page) in consolidator.cache

            tplconsolidate.clear_cache()
            assert len(consolidator.cache) == 0
        finally:
            tplconsolidate.reset_consolidator()
