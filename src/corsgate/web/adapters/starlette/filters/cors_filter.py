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
"""CorsFilter — Starlette adapter for the CORS engine.

Preflight (``OPTIONS``) requests are answered here: a 401 when any check
fails, otherwise a 200 carrying the ``Access-Control-*`` headers.  With
``options_passthrough`` the application renders the response instead and the
filter only adjusts status and headers.

Actual requests always reach the application.  Failed checks just mean no
CORS headers are added; it is the browser that then withholds the response
from the calling script.
"""

from __future__ import annotations

from typing import Any, cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from corsgate.core.config import Config
from corsgate.cors.checks import CorsRequest
from corsgate.cors.engine import CorsDecision, CorsEngine
from corsgate.cors.headers import VARY, CorsHeaders
from corsgate.cors.policy import PolicyConfig
from corsgate.web.filters import OncePerRequestFilter
from corsgate.web.ordering import CORS_FILTER_ORDER, order
from corsgate.web.ports.filter import CallNext

logger = structlog.get_logger("corsgate.cors")


def apply_headers(response: Any, headers: CorsHeaders) -> None:
    for name, value in headers:
        response.headers[name] = value


@order(CORS_FILTER_ORDER)
class CorsFilter(OncePerRequestFilter):
    """Applies a :class:`PolicyConfig` to every request passing the chain.

    ``call_next`` is awaited at most once per request and anything it raises
    propagates unchanged.
    """

    def __init__(self, policy: PolicyConfig) -> None:
        self._policy = policy
        self._engine = CorsEngine(policy)
        self.url_patterns = list(policy.url_patterns)
        self.exclude_patterns = list(policy.exclude_patterns)

    @classmethod
    def from_config(cls, config: Config) -> CorsFilter:
        return cls(PolicyConfig.from_config(config))

    @property
    def policy(self) -> PolicyConfig:
        return self._policy

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        decision = self._engine.decide(CorsRequest.from_headers(request.method, request.headers))

        if decision.preflight:
            response = await self._preflight_response(request, call_next, decision)
        else:
            response = cast(Response, await call_next(request))
            if decision.allowed:
                response.headers.add_vary_header(cast(str, decision.vary))
                apply_headers(response, decision.headers)

        if self._policy.debug and decision.allowed:
            logger.debug(
                "cors_response_headers",
                preflight=decision.preflight,
                status_code=response.status_code,
                headers=dict(response.headers),
            )
        return response

    async def _preflight_response(self, request: Request, call_next: CallNext, decision: CorsDecision) -> Response:
        policy = self._policy
        invoke_app = policy.options_passthrough and (decision.allowed or policy.passthrough_rejected_preflight)

        if invoke_app:
            response = cast(Response, await call_next(request))
            if not decision.allowed:
                # The application only supplies the body; the rejection stands.
                response.status_code = cast(int, decision.status)
        else:
            response = Response(status_code=cast(int, decision.status))

        response.headers[VARY] = cast(str, decision.vary)
        apply_headers(response, decision.headers)
        return response
