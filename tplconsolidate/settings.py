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

"""Consolidator-wide defaults, optionally read from the environment.

Template caching is off by default so edited templates show up without
restarting the application.  Production deployments turn it on by
setting ``TPLCONSOLIDATE_ENV=production`` (or ``TPLCONSOLIDATE_CACHE=1``).

Environment variables:

* ``TPLCONSOLIDATE_ENV`` -- ``production`` enables caching by default
* ``TPLCONSOLIDATE_CACHE`` -- explicit on/off, overrides the above
* ``TPLCONSOLIDATE_VIEWS`` -- default directory for partials
* ``TPLCONSOLIDATE_PARTIAL_POLICY`` -- ``best_effort`` or ``fail_fast``
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from tplconsolidate.options import PartialPolicy

logger = logging.getLogger(__name__)

ENV_PREFIX = "TPLCONSOLIDATE_"
DEFAULT_PARTIAL_EXTENSION = ".html"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ConsolidateSettings:
    """Defaults applied to render options that leave a field unset."""

    cache: bool = False
    views: str | None = None
    partial_extension: str = DEFAULT_PARTIAL_EXTENSION
    partial_policy: PartialPolicy = PartialPolicy.BEST_EFFORT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ConsolidateSettings:
        env = os.environ if environ is None else environ

        cache = env.get(f"{ENV_PREFIX}ENV", "").lower() == "production"
        raw_cache = env.get(f"{ENV_PREFIX}CACHE")
        if raw_cache is not None:
            cache = raw_cache.strip().lower() in _TRUTHY

        policy = PartialPolicy.BEST_EFFORT
        raw_policy = env.get(f"{ENV_PREFIX}PARTIAL_POLICY")
        if raw_policy:
            try:
                policy = PartialPolicy(raw_policy.strip().lower())
            except ValueError:
                logger.warning(
                    "Ignoring unknown partial policy %r; using %s",
                    raw_policy, policy.value,
                )

        return cls(
            cache=cache,
            views=env.get(f"{ENV_PREFIX}VIEWS") or None,
            partial_policy=policy,
        )
