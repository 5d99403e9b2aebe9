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

"""Jinja2 engine, rendering straight from the file system.

Jinja2 loads and caches templates itself, so this engine bypasses the
shared file cache.  Lookup order for ``{% include %}`` / ``{% extends %}``:

1. the directory of the template being rendered
2. ``options.views``, when set

With ``options.cache`` true the environment never re-checks files once
loaded; otherwise it reloads templates whose mtime has changed.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import OrderedDict
from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.exceptions import CompileError, ReadError
from tplconsolidate.options import RenderOptions

logger = logging.getLogger(__name__)

# Environments kept, least recently used evicted first
MAX_ENVIRONMENTS = 64


class JinjaEngine(BaseEngine):
    """Jinja2 templates via ``FileSystemLoader``."""

    ENGINE_NAME = "jinja2"
    DISPLAY_NAME = "Jinja2"
    DESCRIPTION = "Jinja2 templates with native file loading and caching"
    PACKAGE = "Jinja2"

    NATIVE_FILE_RENDER = True

    def __init__(self) -> None:
        super().__init__()
        self._environments: OrderedDict[tuple[tuple[str, ...], bool], Any] = OrderedDict()

    def _load(self) -> Any:
        try:
            import jinja2
        except ImportError:
            raise ImportError(
                "Jinja2 package not installed. Install with: pip install Jinja2"
            )
        return jinja2

    def _environment(self, search_path: tuple[str, ...], cache: bool) -> Any:
        key = (search_path, cache)
        env = self._environments.get(key)
        if env is not None:
            self._environments.move_to_end(key)
        else:
            jinja2 = self._lib
            env = jinja2.Environment(
                loader=jinja2.FileSystemLoader(list(search_path)),
                auto_reload=not cache,
                keep_trailing_newline=True,
                autoescape=False,
            )
            self._environments[key] = env
            logger.debug("Created Jinja2 environment for %s", search_path)
            while len(self._environments) > MAX_ENVIRONMENTS:
                evicted, _ = self._environments.popitem(last=False)
                logger.debug("Evicted Jinja2 environment for %s", evicted[0])
        return env

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.render(options.context())

    async def compile_and_render(self, path, options, reader, resolver) -> str:
        options.filename = path
        directory, name = os.path.split(os.path.abspath(path))
        search_path = [directory]
        if options.views and os.path.abspath(options.views) != directory:
            search_path.append(os.path.abspath(options.views))
        env = self._environment(tuple(search_path), bool(options.cache))

        jinja2 = self._lib
        loop = asyncio.get_running_loop()
        try:
            template = await loop.run_in_executor(None, env.get_template, name)
        except jinja2.TemplateNotFound as exc:
            raise ReadError(
                f"Cannot read template {path!r}: not found", path=path,
            ) from exc
        except jinja2.TemplateSyntaxError as exc:
            raise CompileError(
                f"jinja2: cannot compile {path!r}: {exc}",
                path=path,
                engine=self.ENGINE_NAME,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Cannot read template {path!r}: {exc}", path=path) from exc

        return self.render_checked(template, options, {})
