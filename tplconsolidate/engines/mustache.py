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

"""Mustache engine (chevron) with partial resolution.

A template compiles to chevron's token list.  ``{{> name}}`` tags in that
list are resolved to ``<views>/<name><partial_extension>`` and compiled
the same way before the parent is rendered.  chevron never reads partials
from disk itself: a partial missing from the resolved mapping, including
one referenced only by another partial, renders as an empty string.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions

PARTIAL_TAG = "partial"


class MustacheEngine(BaseEngine):
    """Logic-less Mustache templates via chevron."""

    ENGINE_NAME = "mustache"
    DISPLAY_NAME = "Mustache"
    DESCRIPTION = "Mustache templates (chevron) with {{> partial}} support"
    PACKAGE = "chevron"

    SUPPORTS_PARTIALS = True

    def _load(self) -> Any:
        try:
            import chevron
            import chevron.tokenizer
        except ImportError:
            raise ImportError(
                "chevron package not installed. Install with: pip install chevron"
            )
        return chevron

    def compile(self, source: str, options: RenderOptions) -> list[tuple[str, str]]:
        return list(self._lib.tokenizer.tokenize(source))

    def partial_names(self, template: list[tuple[str, str]]) -> list[str]:
        return [key for tag, key in template if tag == PARTIAL_TAG]

    def render(
        self,
        template: list[tuple[str, str]],
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        kwargs = dict(options.engine_options)
        kwargs["partials_dict"] = defaultdict(str, partials)
        kwargs["partials_path"] = None
        return self._lib.render(template, options.context(), **kwargs)
