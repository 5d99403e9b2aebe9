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

"""Genshi text templates."""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class GenshiEngine(BaseEngine):
    """Genshi ``NewTextTemplate`` (``{% for %}`` / ``${expr}`` syntax)."""

    ENGINE_NAME = "genshi"
    DISPLAY_NAME = "Genshi"
    DESCRIPTION = "Genshi text templates"
    PACKAGE = "Genshi"

    def _load(self) -> Any:
        try:
            from genshi.template import NewTextTemplate
        except ImportError:
            raise ImportError(
                "Genshi package not installed. Install with: pip install Genshi"
            )
        return NewTextTemplate

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib(source, filename=options.filename, **options.engine_options)

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.generate(**options.context()).render("text")
