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

"""Mako engine."""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class MakoEngine(BaseEngine):
    """Mako templates compiled from source text.

    ``options.engine_options`` are passed to ``mako.template.Template``
    (e.g. ``default_filters``, ``strict_undefined``).
    """

    ENGINE_NAME = "mako"
    DISPLAY_NAME = "Mako"
    DESCRIPTION = "Mako templates"
    PACKAGE = "Mako"

    def _load(self) -> Any:
        try:
            from mako.template import Template
        except ImportError:
            raise ImportError(
                "Mako package not installed. Install with: pip install Mako"
            )
        return Template

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib(text=source, **options.engine_options)

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.render(**options.context())
