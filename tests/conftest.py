"""Shared test doubles for tplconsolidate tests."""

from __future__ import annotations

import re
import threading
from pathlib import Path
from typing import Any

import pytest

from tplconsolidate import Consolidator
from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.reader import read_text_file
from tplconsolidate.registry import EngineRegistry

PARTIAL_RE = re.compile(r"\{\{>\s*(\w+)\s*\}\}")
VAR_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class FakeEngine(BaseEngine):
    """Tiny ``{{var}}`` / ``{{> partial}}`` engine that records its calls."""

    ENGINE_NAME = "fake"
    DISPLAY_NAME = "Fake"
    DESCRIPTION = "Test double"
    PACKAGE = ""

    SUPPORTS_PARTIALS = True

    def __init__(self, events: list[str] | None = None) -> None:
        super().__init__()
        self.events = events if events is not None else []
        self.compiled: list[str] = []
        self.rendered_partials: list[dict[str, Any]] = []
        self.fail_compile_on: str | None = None
        self.fail_render = False

    def _load(self) -> Any:
        return object()

    def compile(self, source: str, options) -> str:
        if self.fail_compile_on is not None and self.fail_compile_on in source:
            raise SyntaxError(f"bad token {self.fail_compile_on!r}")
        self.compiled.append(source)
        return source

    def partial_names(self, template: str) -> list[str]:
        return PARTIAL_RE.findall(template)

    def render(self, template: str, options, partials: dict[str, Any]) -> str:
        self.events.append("render")
        self.rendered_partials.append(dict(partials))
        if self.fail_render:
            raise ZeroDivisionError("division by zero")
        text = PARTIAL_RE.sub(lambda m: partials.get(m.group(1), ""), template)
        ctx = options.context()
        return VAR_RE.sub(lambda m: str(ctx.get(m.group(1), "")), text)


class CountingReader:
    """``read_file`` replacement that records every storage access."""

    def __init__(self, events: list[str] | None = None) -> None:
        self.calls: list[str] = []
        self.events = events if events is not None else []
        self._lock = threading.Lock()

    def __call__(self, path: str) -> str:
        with self._lock:
            self.calls.append(path)
            self.events.append(f"read:{Path(path).name}")
        return read_text_file(path)

    def count(self, path: str | Path) -> int:
        return self.calls.count(str(path))


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def fake_engine(events) -> FakeEngine:
    return FakeEngine(events)


@pytest.fixture
def counting_reader(events) -> CountingReader:
    return CountingReader(events)


@pytest.fixture
def consolidator(fake_engine, counting_reader) -> Consolidator:
    registry = EngineRegistry({"fake": lambda: fake_engine})
    return Consolidator(registry=registry, read_file=counting_reader)
