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

"""Template engine table.

Engine classes are registered by name and the built-ins are discovered
on first access.  Importing an engine module is cheap: the third-party
library is only imported when the class is instantiated.  New engines
can be added at runtime via :func:`register_engine`.
"""

from __future__ import annotations

from typing import Type

from tplconsolidate.engines.base import BaseEngine

__all__ = [
    "BaseEngine",
    "get_engine_class",
    "list_engines",
    "register_engine",
]

# Registry: engine name → class
_REGISTRY: dict[str, Type[BaseEngine]] = {}
_builtins_registered = False


def register_engine(name: str, cls: Type[BaseEngine]) -> None:
    """Register an engine class under *name*."""
    _REGISTRY[name] = cls


def list_engines() -> list[str]:
    """Return names of all registered engines."""
    _ensure_builtins()
    return list(_REGISTRY.keys())


def get_engine_class(name: str) -> Type[BaseEngine]:
    """Return the engine class registered under *name*.

    Raises :class:`ValueError` if no such engine is registered.
    """
    _ensure_builtins()
    cls = _REGISTRY.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown engine {name!r}. Available: {sorted(_REGISTRY.keys())}"
        )
    return cls


def _ensure_builtins() -> None:
    """Lazily register built-in engines on first access."""
    global _builtins_registered
    if _builtins_registered:
        return
    _builtins_registered = True

    from tplconsolidate.engines.chameleon import ChameleonEngine
    from tplconsolidate.engines.genshi import GenshiEngine
    from tplconsolidate.engines.handlebars import HandlebarsEngine
    from tplconsolidate.engines.jinja import JinjaEngine
    from tplconsolidate.engines.liquid import LiquidEngine
    from tplconsolidate.engines.mako import MakoEngine
    from tplconsolidate.engines.markdown import MarkdownEngine
    from tplconsolidate.engines.mustache import MustacheEngine
    from tplconsolidate.engines.pystache import PystacheEngine
    from tplconsolidate.engines.string_template import StringTemplateEngine
    from tplconsolidate.engines.tornado import TornadoEngine

    for cls in (
        JinjaEngine,
        MustacheEngine,
        HandlebarsEngine,
        MakoEngine,
        TornadoEngine,
        LiquidEngine,
        MarkdownEngine,
        StringTemplateEngine,
        PystacheEngine,
        ChameleonEngine,
        GenshiEngine,
    ):
        # Runtime registrations made before first access take precedence
        _REGISTRY.setdefault(cls.ENGINE_NAME, cls)
