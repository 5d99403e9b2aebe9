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

"""In-memory cache of template source files.

Entries are keyed by the path string exactly as passed to the render
call.  There is no expiry and no size bound: once a path is cached it is
served from memory until :meth:`FileCache.clear` is called, even if the
file changes on disk.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class FileCache:
    """Thread-safe path -> contents mapping."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> str | None:
        """Return the cached contents for *path*, or ``None`` if not cached."""
        with self._lock:
            return self._entries.get(path)

    def put(self, path: str, contents: str) -> str:
        """Cache *contents* under *path* unless an entry already exists.

        Returns the value now held for *path*.  The first stored value wins
        so concurrent readers of one path all observe the same contents.
        """
        with self._lock:
            stored = self._entries.setdefault(path, contents)
        logger.debug("Cached template source %s (%d chars)", path, len(stored))
        return stored

    def clear(self) -> None:
        """Remove all cached entries."""
        with self._lock:
            count = len(self._entries)
            self._entries = {}
        logger.info("Cleared template cache (%d entries)", count)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
