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

"""Error types reported by render calls.

Every failure is scoped to the single render that triggered it and is
delivered through :class:`~tplconsolidate.options.RenderResult.error`
rather than raised at the caller.
"""

from __future__ import annotations


class ConsolidateError(Exception):
    """Base class for all render pipeline errors."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        engine: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.engine = engine


class ReadError(ConsolidateError):
    """A template source file could not be read."""


class EngineLoadError(ConsolidateError):
    """The engine is unknown or its library failed to import/initialise."""


class CompileError(ConsolidateError):
    """The engine rejected the template source."""


class RenderError(ConsolidateError):
    """The engine failed while rendering a compiled template."""


class PartialResolutionError(ConsolidateError):
    """A named partial could not be read or compiled."""

    def __init__(
        self,
        message: str,
        *,
        partial: str,
        path: str | None = None,
        engine: str | None = None,
    ) -> None:
        super().__init__(message, path=path, engine=engine)
        self.partial = partial


class InvalidOptionsError(ConsolidateError, ValueError):
    """A render option has a value outside its allowed set."""
