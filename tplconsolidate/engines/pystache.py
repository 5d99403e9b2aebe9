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

"""Mustache engine backed by pystache.

An alternative to the chevron-backed ``mustache`` engine.  Partials are not
resolved for this engine: every ``{{> name}}`` renders as an empty string
and nothing is read from disk.
"""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class PystacheEngine(BaseEngine):
    """Mustache templates via pystache."""

    ENGINE_NAME = "pystache"
    DISPLAY_NAME = "pystache"
    DESCRIPTION = "Mustache templates (pystache)"
    PACKAGE = "pystache"

    def _load(self) -> Any:
        try:
            import pystache
        except ImportError:
            raise ImportError(
                "pystache package not installed. Install with: pip install pystache"
            )
        return pystache

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib.parse(source)

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        kwargs = {"missing_tags": "ignore", **options.engine_options}
        kwargs["partials"] = {}
        renderer = self._lib.Renderer(**kwargs)
        return renderer.render(template, options.context())
