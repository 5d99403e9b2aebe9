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

"""Tornado template engine."""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class TornadoEngine(BaseEngine):
    """``tornado.template`` templates; output is decoded from UTF-8 bytes."""

    ENGINE_NAME = "tornado"
    DISPLAY_NAME = "Tornado"
    DESCRIPTION = "Tornado web framework templates"
    PACKAGE = "tornado"

    def _load(self) -> Any:
        try:
            from tornado import template
        except ImportError:
            raise ImportError(
                "tornado package not installed. Install with: pip install tornado"
            )
        return template

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib.Template(
            source,
            name=options.filename or "<string>",
            **options.engine_options,
        )

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.generate(**options.context()).decode("utf-8")
