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

"""Chameleon page templates (TAL/METAL with ``${}`` expressions)."""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class ChameleonEngine(BaseEngine):
    """Chameleon ``PageTemplate`` compiled from source text.

    ``options.engine_options`` are passed to ``PageTemplate``
    (e.g. ``strict``, ``auto_reload``).
    """

    ENGINE_NAME = "chameleon"
    DISPLAY_NAME = "Chameleon"
    DESCRIPTION = "Chameleon page templates"
    PACKAGE = "Chameleon"

    def _load(self) -> Any:
        try:
            from chameleon import PageTemplate
        except ImportError:
            raise ImportError(
                "Chameleon package not installed. Install with: pip install Chameleon"
            )
        return PageTemplate

    def compile(self, source: str, options: RenderOptions) -> Any:
        return self._lib(source, filename=options.filename, **options.engine_options)

    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.render(**options.context())
