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

"""Resolution of named partials for engines with template composition.

After the parent template is compiled, the engine reports which partials
it references.  Each name maps to ``<views>/<name><partial_extension>``.
All partials are read and compiled concurrently and the parent is only
rendered once every one of them has finished, successfully or not.

A partial that fails is handled according to ``options.partial_policy``:

* ``BEST_EFFORT`` -- logged and left out of the mapping; the engine then
  renders that reference as it renders any unknown partial
* ``FAIL_FAST`` -- the render fails with :class:`PartialResolutionError`
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tplconsolidate.exceptions import PartialResolutionError
from tplconsolidate.options import PartialPolicy, RenderOptions

if TYPE_CHECKING:
    from tplconsolidate.engines.base import BaseEngine
    from tplconsolidate.reader import TemplateReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartialDescriptor:
    """A partial referenced by a parent template."""

    name: str
    path: str


def describe_partials(
    names: Iterable[str], options: RenderOptions,
) -> list[PartialDescriptor]:
    """Map partial names to file paths, dropping duplicate references."""
    views = options.views or ""
    extension = options.partial_extension or ""
    descriptors: list[PartialDescriptor] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        descriptors.append(
            PartialDescriptor(name=name, path=os.path.join(views, name + extension))
        )
    return descriptors


class PartialResolver:
    """Reads and compiles the partials of a compiled parent template."""

    def __init__(self, reader: TemplateReader) -> None:
        self.reader = reader

    async def resolve(
        self,
        engine: BaseEngine,
        template: Any,
        options: RenderOptions,
    ) -> dict[str, Any]:
        """Return ``{partial name: compiled partial}`` for *template*."""
        descriptors = describe_partials(engine.partial_names(template), options)
        if not descriptors:
            return {}

        logger.debug(
            "Resolving %d partial(s) for %s: %s",
            len(descriptors), options.filename,
            ", ".join(d.name for d in descriptors),
        )
        results = await asyncio.gather(
            *(self._compile_partial(engine, d, options) for d in descriptors),
            return_exceptions=True,
        )

        compiled: dict[str, Any] = {}
        for descriptor, result in zip(descriptors, results):
            if not isinstance(result, BaseException):
                compiled[descriptor.name] = result
                continue
            if not isinstance(result, Exception):
                raise result
            if options.partial_policy is PartialPolicy.FAIL_FAST:
                raise result
            logger.warning(
                "Dropping partial %r of %s: %s",
                descriptor.name, options.filename, result,
            )
        return compiled

    async def _compile_partial(
        self,
        engine: BaseEngine,
        descriptor: PartialDescriptor,
        options: RenderOptions,
    ) -> Any:
        try:
            source = await self.reader.read(descriptor.path, options)
            return engine.compile_partial(source, options)
        except Exception as exc:
            raise PartialResolutionError(
                f"Cannot resolve partial {descriptor.name!r} from {descriptor.path!r}: {exc}",
                partial=descriptor.name,
                path=descriptor.path,
                engine=engine.ENGINE_NAME,
            ) from exc
