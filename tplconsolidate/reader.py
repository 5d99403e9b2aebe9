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

"""Template source reading with optional file caching."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from tplconsolidate.cache import FileCache
from tplconsolidate.exceptions import ReadError
from tplconsolidate.options import RenderOptions

logger = logging.getLogger(__name__)


def read_text_file(path: str) -> str:
    """Read *path* as UTF-8.  Separated for testability."""
    return Path(path).read_text(encoding="utf-8")


class TemplateReader:
    """Reads template sources, consulting a :class:`FileCache` on request.

    Args:
        cache: Shared cache; consulted only when ``options.cache`` is true.
        read_file: Blocking ``path -> contents`` function, run in the
            event loop's default executor.
    """

    def __init__(
        self,
        cache: FileCache,
        read_file: Callable[[str], str] = read_text_file,
    ) -> None:
        self.cache = cache
        self._read_file = read_file

    async def read(self, path: str, options: RenderOptions) -> str:
        """Return the contents of *path*.

        Raises :class:`ReadError` if the file cannot be read.  Failed
        reads are never cached.
        """
        if options.cache:
            cached = self.cache.get(path)
            if cached is not None:
                logger.debug("Template cache hit: %s", path)
                return cached

        loop = asyncio.get_running_loop()
        try:
            contents = await loop.run_in_executor(None, self._read_file, path)
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Cannot read template {path!r}: {exc}", path=path) from exc

        if options.cache:
            contents = self.cache.put(path, contents)
        return contents
