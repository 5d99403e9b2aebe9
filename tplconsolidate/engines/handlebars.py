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

"""Handlebars engine (pybars3)."""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class HandlebarsEngine(BaseEngine):
    """Handlebars templates compiled to Python callables by pybars3."""

    ENGINE_NAME = "handlebars"
    DISPLAY_NAME = "Handlebars"
    DESCRIPTION = "Handlebars templates via pybars3"
    PACKAGE = "pybars3"

    def _load(self) -> Any:
        try:
            import pybars
        except ImportError:
            raise ImportError(
                "pybars3 package not installed. Install with: pip install pybars3"
            )
        return pybars.Compiler()

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib.compile(source)

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        # pybars returns a strlist
        return str(template(options.context(), **options.engine_options))
