# tplconsolidate — one calling convention for many template engines
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Render any registered template engine through one call.

Usage::

    from tplconsolidate import Consolidator

    consolidator = Consolidator()
    result = await consolidator.render(
        "mustache", "views/hello.html", {"name": "Ada", "cache": True},
    )
    if result.ok:
        print(result.output)

    # Per-engine render function, as a host framework would register it
    render_mustache = consolidator.renderer("mustache")
    result = await render_mustache("views/hello.html", {"name": "Ada"})
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from tplconsolidate.cache import FileCache
from tplconsolidate.exceptions import ConsolidateError, RenderError
from tplconsolidate.options import RenderOptions, RenderResult
from tplconsolidate.partials import PartialResolver
from tplconsolidate.reader import TemplateReader, read_text_file
from tplconsolidate.registry import EngineRegistry
from tplconsolidate.settings import ConsolidateSettings

logger = logging.getLogger(__name__)

OptionsLike = RenderOptions | Mapping[str, Any] | None


class Consolidator:
    """Owns the file cache and engine registry shared by all render calls.

    Args:
        settings: Defaults for options a call leaves unset.
        cache: File cache; a fresh one by default.
        registry: Engine registry; a fresh one over the built-in engines
            by default.
        read_file: Blocking file read function, for tests.
    """

    def __init__(
        self,
        settings: ConsolidateSettings | None = None,
        *,
        cache: FileCache | None = None,
        registry: EngineRegistry | None = None,
        read_file: Callable[[str], str] = read_text_file,
    ) -> None:
        self.settings = settings if settings is not None else ConsolidateSettings()
        self.cache = cache if cache is not None else FileCache()
        self.registry = registry if registry is not None else EngineRegistry()
        self.reader = TemplateReader(self.cache, read_file)
        self.resolver = PartialResolver(self.reader)

    async def render(
        self,
        engine: str,
        path: str | os.PathLike[str],
        options: OptionsLike = None,
    ) -> RenderResult:
        """Render the template at *path* with *engine*.

        Never raises for pipeline failures: the first error encountered
        (options, engine load, read, compile, render) is returned in
        :attr:`RenderResult.error`.
        """
        path = os.fspath(path)
        logger.debug("Render request: engine=%s, path=%s", engine, path)

        try:
            opts = RenderOptions.coerce(options).with_defaults(self.settings)
            handle = self.registry.resolve(engine)
            output = await handle.compile_and_render(path, opts, self.reader, self.resolver)
        except ConsolidateError as exc:
            logger.debug("Render of %s with %s failed: %s", path, engine, exc)
            return RenderResult(engine=engine, path=path, error=exc)
        except Exception as exc:
            logger.debug("Unexpected failure rendering %s with %s", path, engine, exc_info=True)
            error = RenderError(
                f"{engine}: unexpected failure rendering {path!r}: {exc}",
                path=path,
                engine=engine,
            )
            error.__cause__ = exc
            return RenderResult(engine=engine, path=path, error=error)

        return RenderResult(engine=engine, path=path, output=output)

    def render_sync(
        self,
        engine: str,
        path: str | os.PathLike[str],
        options: OptionsLike = None,
    ) -> RenderResult:
        """Blocking :meth:`render` for callers without a running event loop."""
        return asyncio.run(self.render(engine, path, options))

    def renderer(
        self, engine: str,
    ) -> Callable[[str | os.PathLike[str], OptionsLike], Awaitable[RenderResult]]:
        """Return ``render(path, options)`` bound to *engine*."""
        return functools.partial(self.render, engine)

    def clear_cache(self) -> None:
        """Drop every cached template source."""
        self.cache.clear()

    def list_engines(self) -> list[str]:
        return self.registry.names()

    def engine_info(self, engine: str) -> dict[str, object]:
        """Describe *engine*, loading its library if not yet loaded."""
        handle = self.registry.resolve(engine)
        return type(handle).info()


# ---------------------------------------------------------------------------
# Global singleton
# ---------------------------------------------------------------------------

_global_consolidator: Consolidator | None = None


def get_consolidator() -> Consolidator:
    """Return the process-wide :class:`Consolidator`, configured from the environment."""
    global _global_consolidator
    if _global_consolidator is None:
        _global_consolidator = Consolidator(ConsolidateSettings.from_env())
    return _global_consolidator


def reset_consolidator() -> None:
    global _global_consolidator
    _global_consolidator = None


async def render(
    engine: str,
    path: str | os.PathLike[str],
    options: OptionsLike = None,
) -> RenderResult:
    return await get_consolidator().render(engine, path, options)


def render_sync(
    engine: str,
    path: str | os.PathLike[str],
    options: OptionsLike = None,
) -> RenderResult:
    return get_consolidator().render_sync(engine, path, options)


def clear_cache() -> None:
    get_consolidator().clear_cache()
