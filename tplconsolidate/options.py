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

"""Per-call render options and the render result type."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from tplconsolidate.exceptions import ConsolidateError, InvalidOptionsError

if TYPE_CHECKING:
    from tplconsolidate.settings import ConsolidateSettings

# Keys of a flat options bag that configure the render rather than
# feed the template.
_RESERVED_KEYS = frozenset({
    "cache",
    "filename",
    "locals",
    "settings",
    "partial_extension",
    "partial_policy",
    "engine_options",
})


class PartialPolicy(str, Enum):
    """What to do when a referenced partial cannot be read or compiled."""

    BEST_EFFORT = "best_effort"  # log and leave it out of the mapping
    FAIL_FAST = "fail_fast"  # fail the whole render


@dataclass
class RenderOptions:
    """Options for one render call.

    Attributes:
        data: Values visible to the template.
        cache: Use the shared file cache for template sources.
        filename: Source path; set by the engine adapter before compiling.
        views: Base directory for partial templates.
        partial_extension: File extension appended to partial names.
        partial_policy: Handling of partials that fail to resolve.
        engine_options: Keyword arguments forwarded to the engine's compiler.

    ``None`` means "use the consolidator default" for the fields that have
    one (see :meth:`with_defaults`).
    """

    data: dict[str, Any] = field(default_factory=dict)
    cache: bool | None = None
    filename: str | None = None
    views: str | None = None
    partial_extension: str | None = None
    partial_policy: PartialPolicy | None = None
    engine_options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> RenderOptions:
        """Build options from a flat bag such as ``{"name": "Ada", "cache": True}``.

        ``settings.views`` supplies the partial directory and a ``locals``
        mapping is merged into the template data.  Every other key is
        template data.
        """
        data = {k: v for k, v in options.items() if k not in _RESERVED_KEYS}
        local_values = options.get("locals")
        if isinstance(local_values, Mapping):
            data.update(local_values)

        settings = options.get("settings") or {}
        policy = options.get("partial_policy")
        if policy is not None:
            try:
                policy = PartialPolicy(policy)
            except ValueError as exc:
                raise InvalidOptionsError(f"Unknown partial_policy: {policy!r}") from exc
        return cls(
            data=data,
            cache=options.get("cache"),
            filename=options.get("filename"),
            views=settings.get("views") if isinstance(settings, Mapping) else None,
            partial_extension=options.get("partial_extension"),
            partial_policy=policy,
            engine_options=dict(options.get("engine_options") or {}),
        )

    @classmethod
    def coerce(cls, options: RenderOptions | Mapping[str, Any] | None) -> RenderOptions:
        if options is None:
            return cls()
        if isinstance(options, RenderOptions):
            return options
        return cls.from_mapping(options)

    def with_defaults(self, settings: ConsolidateSettings) -> RenderOptions:
        """Return a copy with unset fields filled from *settings*.

        The copy owns its own ``data`` dict, so adapters may annotate it
        without touching the caller's options.
        """
        return replace(
            self,
            data=dict(self.data),
            cache=settings.cache if self.cache is None else self.cache,
            views=self.views if self.views is not None else settings.views,
            partial_extension=(
                self.partial_extension
                if self.partial_extension is not None
                else settings.partial_extension
            ),
            partial_policy=self.partial_policy or settings.partial_policy,
            engine_options=dict(self.engine_options),
        )

    def context(self, expose_locals: bool = False) -> dict[str, Any]:
        """Return the mapping handed to the engine as template data."""
        ctx = dict(self.data)
        if self.filename is not None:
            ctx.setdefault("filename", self.filename)
        if expose_locals:
            ctx.setdefault("locals", dict(self.data))
        return ctx


@dataclass
class RenderResult:
    """Outcome of a render: either ``output`` or ``error`` is set."""

    engine: str
    path: str
    output: str | None = None
    error: ConsolidateError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the rendered output, raising the error if there is one."""
        if self.error is not None:
            raise self.error
        return self.output or ""
