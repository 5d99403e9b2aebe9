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

"""Liquid engine (python-liquid).

Template data is also available as ``locals``, so ``{{ locals.name }}``
and ``{{ name }}`` render the same value.
"""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class LiquidEngine(BaseEngine):
    """Shopify Liquid templates via python-liquid."""

    ENGINE_NAME = "liquid"
    DISPLAY_NAME = "Liquid"
    DESCRIPTION = "Liquid templates via python-liquid"
    PACKAGE = "python-liquid"

    EXPOSE_LOCALS = True

    def _load(self) -> Any:
        try:
            import liquid
        except ImportError:
            raise ImportError(
                "python-liquid package not installed. "
                "Install with: pip install python-liquid"
            )
        return liquid.Environment()

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib.from_string(source)

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.render(**options.context(expose_locals=self.EXPOSE_LOCALS))
