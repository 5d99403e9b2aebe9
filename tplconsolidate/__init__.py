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

"""Template engine consolidation: one ``render(path, options)`` for all engines.

Usage::

    import tplconsolidate

    result = tplconsolidate.render_sync(
        "mustache", "views/hello.html", {"name": "Ada"},
    )
    print(result.unwrap())

    tplconsolidate.clear_cache()
"""

from tplconsolidate.consolidator import (
    Consolidator,
    clear_cache,
    get_consolidator,
    render,
    render_sync,
    reset_consolidator,
)
from tplconsolidate.engines import BaseEngine, list_engines, register_engine
from tplconsolidate.exceptions import (
    CompileError,
    ConsolidateError,
    EngineLoadError,
    InvalidOptionsError,
    PartialResolutionError,
    ReadError,
    RenderError,
)
from tplconsolidate.options import PartialPolicy, RenderOptions, RenderResult
from tplconsolidate.settings import ConsolidateSettings

__version__ = "0.1.0"
version = __version__

__all__ = [
    "BaseEngine",
    "CompileError",
    "ConsolidateError",
    "ConsolidateSettings",
    "Consolidator",
    "EngineLoadError",
    "InvalidOptionsError",
    "PartialPolicy",
    "PartialResolutionError",
    "ReadError",
    "RenderError",
    "RenderOptions",
    "RenderResult",
    "clear_cache",
    "get_consolidator",
    "list_engines",
    "register_engine",
    "render",
    "render_sync",
    "reset_consolidator",
    "version",
]
