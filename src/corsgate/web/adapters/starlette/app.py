# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Starlette application factory with the CORS filter installed."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from corsgate.core.config import Config
from corsgate.cors.policy import PolicyConfig
from corsgate.logging.structlog_adapter import StructlogAdapter
from corsgate.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from corsgate.web.adapters.starlette.filters.cors_filter import CorsFilter
from corsgate.web.ports.filter import WebFilter

logger = structlog.get_logger("corsgate.web")


def create_app(
    config: Config | None = None,
    policy: PolicyConfig | None = None,
    routes: Sequence[BaseRoute] | None = None,
    filters: Sequence[WebFilter] = (),
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application guarded by :class:`CorsFilter`.

    The policy is taken from *policy* when given, otherwise built from the
    ``corsgate.cors`` section of *config* (packaged defaults when *config*
    is ``None`` too).  Extra *filters* share the chain and are ordered
    with the CORS filter by ``@order``.

    Logging is configured from *config* whenever one is given or loaded;
    with only a *policy* the host application's logging setup is left alone.

    Raises:
        CorsConfigurationError: If *config* holds a malformed CORS section.
    """
    if policy is None:
        if config is None:
            config = Config.from_sources(".")
        policy = PolicyConfig.from_config(config)
    if config is not None:
        StructlogAdapter().configure(config)

    chain: list[WebFilter] = [CorsFilter(policy), *filters]

    logger.info(
        "cors_filter_installed",
        allow_all_origins=policy.allow_all_origins,
        origins=len(policy.plain_origins) + len(policy.wildcard_origins),
        methods=sorted(policy.allowed_methods),
        options_passthrough=policy.options_passthrough,
    )

    return Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
    )
