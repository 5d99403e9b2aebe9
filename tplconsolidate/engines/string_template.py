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

"""Standard library ``string.Template`` engine.

``$name`` and ``${name}`` placeholders; a placeholder without a value
is a render error.  Needs no third-party package.
"""

from __future__ import annotations

import string
from typing import Any

from tplconsolidate.engines.base import BaseEngine
from tplconsolidate.options import RenderOptions


class StringTemplateEngine(BaseEngine):
    """``$``-substitution templates from the standard library."""

    ENGINE_NAME = "string"
    DISPLAY_NAME = "string.Template"
    DESCRIPTION = "Python standard library $-substitution templates"
    PACKAGE = ""

    def _load(self) -> Any:
        return string.Template

    def compile(self, source: str, options: RenderOptions) -> string.Template:
        template = self._lib(source)
        if not template.is_valid():
            raise ValueError("invalid placeholder in template")
        return template

    def render(
        self,
        template: string.Template,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        return template.substitute(options.context())
