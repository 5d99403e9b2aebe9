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

"""Lazily instantiated engine handles.

An :class:`EngineRegistry` maps engine identifiers to factories.  The
factory for an identifier runs on the first :meth:`~EngineRegistry.resolve`
and its result is reused for the lifetime of the registry.  A factory that
fails is not memoized, so the failure only affects the call that hit it.

Identifiers without an explicit factory fall back to the engine classes
in :mod:`tplconsolidate.engines`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

from tplconsolidate.engines import BaseEngine, get_engine_class, list_engines
from tplconsolidate.exceptions import EngineLoadError

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], BaseEngine]


class EngineRegistry:
    """Memoizing engine identifier -> handle table.

    Args:
        factories: Explicit factories, checked before the built-in table.
        include_builtins: Fall back to :func:`get_engine_class` for
            identifiers without an explicit factory.
    """

    def __init__(
        self,
        factories: Mapping[str, EngineFactory] | None = None,
        *,
        include_builtins: bool = True,
    ) -> None:
        self._factories: dict[str, EngineFactory] = dict(factories or {})
        self._include_builtins = include_builtins
        self._handles: dict[str, BaseEngine] = {}
        self._lock = threading.Lock()
        self.load_count = 0

    def register(self, name: str, factory: EngineFactory) -> None:
        """Add or replace the factory for *name*, forgetting any loaded handle."""
        with self._lock:
            self._factories[name] = factory
            self._handles.pop(name, None)

    def names(self) -> list[str]:
        """Return all identifiers this registry can resolve."""
        names = list(self._factories)
        if self._include_builtins:
            names.extend(n for n in list_engines() if n not in self._factories)
        return names

    def is_loaded(self, name: str) -> bool:
        with self._lock:
            return name in self._handles

    def resolve(self, name: str) -> BaseEngine:
        """Return the handle for *name*, instantiating it on first use.

        Raises :class:`EngineLoadError` if the identifier is unknown or
        the engine library cannot be loaded.
        """
        with self._lock:
            handle = self._handles.get(name)
            if handle is not None:
                return handle

            factory = self._factory_for(name)
            self.load_count += 1
            try:
                handle = factory()
            except Exception as exc:
                logger.debug("Loading engine %s failed", name, exc_info=True)
                raise EngineLoadError(
                    f"Cannot load template engine {name!r}: {exc}", engine=name,
                ) from exc

            self._handles[name] = handle
            logger.debug("Loaded template engine %s", name)
            return handle

    def _factory_for(self, name: str) -> EngineFactory:
        factory = self._factories.get(name)
        if factory is not None:
            return factory
        if self._include_builtins:
            try:
                return get_engine_class(name)
            except ValueError as exc:
                raise EngineLoadError(str(exc), engine=name) from exc
        raise EngineLoadError(
            f"Unknown engine {name!r}. Available: {sorted(self._factories)}",
            engine=name,
        )
