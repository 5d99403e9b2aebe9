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

"""Markdown engine.

Markdown has no template data: the source is converted to HTML as-is.
``options.engine_options`` are passed to ``markdown.markdown``
(e.g. ``extensions=["tables"]``).
"""

from __future__ import annotations

from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class MarkdownEngine(BaseEngine):
    """Markdown to HTML via Python-Markdown."""

    ENGINE_NAME = "markdown"
    DISPLAY_NAME = "Markdown"
    DESCRIPTION = "Markdown documents converted to HTML"
    PACKAGE = "Markdown"

    def _load(self) -> Any:
        try:
            import markdown
        except ImportError:
            raise ImportError(
                "Markdown package not installed. Install with: pip install Markdown"
            )
        return markdown

    def render(
        self,
        template: str,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return self._lib.markdown(template, **options.engine_options)
