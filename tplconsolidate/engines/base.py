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

"""Abstract base class for template engine adapters.

All adapters inherit from :class:`BaseEngine`.  An adapter imports its
third-party library in :meth:`BaseEngine._load`, which runs once when the
engine registry first instantiates it, and then turns
``(path, options)`` into rendered text through the shared pipeline in
:meth:`BaseEngine.compile_and_render`:

1. read the source (through the file cache when ``options.cache``)
2. ``options.filename = path``
3. :meth:`compile` the source
4. resolve partials, for engines that support them
5. :meth:`render` the compiled template with ``options.context()``

Engines whose library renders straight from a file with its own
template cache set ``NATIVE_FILE_RENDER`` and override
:meth:`compile_and_render`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from tplconsolidate.exceptions import CompileError, ConsolidateError, RenderError

if TYPE_CHECKING:
    from tplconsolidate.options import RenderOptions
    from tplconsolidate.partials import PartialResolver
    from tplconsolidate.reader import TemplateReader


class BaseEngine(ABC):
    """Abstract base class for template engine adapters.

    Class attributes to override:
        ENGINE_NAME   – registry identifier (e.g. ``"mustache"``).
        DISPLAY_NAME  – human-readable label.
        DESCRIPTION   – one-liner.
        PACKAGE       – distribution to ``pip install`` for this engine.

    Behaviour flags:
        NATIVE_FILE_RENDER – the library reads files itself.
        EXPOSE_LOCALS      – template data is also visible as ``locals``.
        SUPPORTS_PARTIALS  – partials are resolved before rendering.
    """

    ENGINE_NAME: str
    DISPLAY_NAME: str
    DESCRIPTION: str
    PACKAGE: str

    NATIVE_FILE_RENDER: bool = False
    EXPOSE_LOCALS: bool = False
    SUPPORTS_PARTIALS: bool = False

    def __init__(self) -> None:
        self._lib = self._load()

    @abstractmethod
    def _load(self) -> Any:
        """Import the engine library and return its handle.

        Raises ``ImportError`` when the library is not installed.
        """

    # --- Engine primitives ---

    def compile(self, source: str, options: RenderOptions) -> Any:
        """Compile *source*.  Engines that render in one step return it as-is."""
        return source

    @abstractmethod
    def render(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str: ...

    def partial_names(self, template: Any) -> list[str]:
        """Names of the partials referenced by a compiled template."""
        return []

    def compile_partial(self, source: str, options: RenderOptions) -> Any:
        return self.compile(source, options)

    # --- Pipeline ---

    async def compile_and_render(
        self,
        path: str,
        options: RenderOptions,
        reader: TemplateReader,
        resolver: PartialResolver,
    ) -> str:
        source = await reader.read(path, options)
        options.filename = path
        template = self.compile_checked(source, options)

        partials: dict[str, Any] = {}
        if self.SUPPORTS_PARTIALS:
            partials = await resolver.resolve(self, template, options)

        return self.render_checked(template, options, partials)

    def compile_checked(self, source: str, options: RenderOptions) -> Any:
        """:meth:`compile`, with any failure reported as :class:`CompileError`."""
        try:
            return self.compile(source, options)
        except ConsolidateError:
            raise
        except Exception as exc:
            raise CompileError(
                f"{self.ENGINE_NAME}: cannot compile {options.filename!r}: {exc}",
                path=options.filename,
                engine=self.ENGINE_NAME,
            ) from exc

    def render_checked(
        self,
        template: Any,
        options: RenderOptions,
        partials: dict[str, Any],
    ) -> str:
        """:meth:`render`, with any failure reported as :class:`RenderError`."""
        try:
            return self.render(template, options, partials)
        except ConsolidateError:
            raise
        except Exception as exc:
            raise RenderError(
                f"{self.ENGINE_NAME}: cannot render {options.filename!r}: {exc}",
                path=options.filename,
                engine=self.ENGINE_NAME,
            ) from exc

    # --- Utility ---

    @classmethod
    def info(cls) -> dict[str, object]:
        return {
            "name": cls.ENGINE_NAME,
            "display_name": cls.DISPLAY_NAME,
            "description": cls.DESCRIPTION,
            "package": cls.PACKAGE,
            "native_file_render": cls.NATIVE_FILE_RENDER,
            "supports_partials": cls.SUPPORTS_PARTIALS,
        }
