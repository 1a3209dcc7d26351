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
"""CorsEngine — transport-agnostic CORS decisions.

The engine classifies a :class:`CorsRequest`, runs the matching check
sequence and works out the response headers.  It performs no I/O: calling
the next handler and writing headers onto a concrete response is the job of
an adapter such as :class:`corsgate.web.adapters.starlette.filters.CorsFilter`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from corsgate.cors.checks import ACTUAL_CHECKS, PREFLIGHT_CHECKS, Check, CheckResult, CorsRequest, run_checks
from corsgate.cors.headers import (
    ACTUAL_VARY,
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    EXPOSE_HEADERS,
    MAX_AGE,
    PREFLIGHT_VARY,
    CorsHeaders,
)
from corsgate.cors.policy import PolicyConfig

logger = structlog.get_logger("corsgate.cors")

PREFLIGHT_OK = 200
PREFLIGHT_REJECTED = 401


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of evaluating one request.

    Attributes:
        preflight: Whether the request was classified as a preflight.
        allowed: Whether every check passed.
        checks: Results in evaluation order; on rejection the last one failed.
        headers: ``Access-Control-*`` headers to set (empty unless allowed).
        vary: Value for ``Vary``.  Preflight responses always get the full
            list (it replaces any existing value); allowed actual responses
            get ``Origin`` appended; otherwise ``None``.
        status: Status code a preflight response must carry, ``None`` for
            actual requests (the downstream status is kept).
    """

    preflight: bool
    allowed: bool
    checks: tuple[CheckResult, ...]
    headers: CorsHeaders = CorsHeaders()
    vary: str | None = None
    status: int | None = None

    @property
    def failed_check(self) -> CheckResult | None:
        if self.checks and not self.checks[-1].passed:
            return self.checks[-1]
        return None


class CorsEngine:
    """Evaluates requests against one immutable :class:`PolicyConfig`.

    Holds no per-request state, so a single instance is safe to share
    across concurrent requests.
    """

    def __init__(self, policy: PolicyConfig) -> None:
        self._policy = policy
        if policy.debug:
            logger.debug(
                "cors_init",
                allowed_headers=sorted(policy.allowed_headers),
                allowed_methods=sorted(policy.allowed_methods),
                allow_all_origins=policy.allow_all_origins,
            )

    @property
    def policy(self) -> PolicyConfig:
        return self._policy

    def decide(self, request: CorsRequest) -> CorsDecision:
        if request.is_preflight:
            self._trace("cors_preflight_request", method=request.method)
            return self.decide_preflight(request)
        self._trace("cors_actual_request", method=request.method)
        return self.decide_actual(request)

    def decide_preflight(self, request: CorsRequest) -> CorsDecision:
        policy = self._policy
        checks = self._run(PREFLIGHT_CHECKS, request)
        if not checks[-1].passed:
            self._trace("cors_preflight_rejected", check=checks[-1].name, reason=checks[-1].reason)
            return CorsDecision(
                preflight=True,
                allowed=False,
                checks=checks,
                vary=PREFLIGHT_VARY,
                status=PREFLIGHT_REJECTED,
            )

        # request_method is present once the checks passed.
        requested_method = str(request.request_method).upper()
        headers = CorsHeaders().with_header(ALLOW_ORIGIN, policy.allow_origin_value(request.origin))
        # Echo only what was asked for rather than the whole allow-list.
        headers = headers.with_header(ALLOW_METHODS, requested_method)
        if request.parsed_headers:
            headers = headers.with_header(ALLOW_HEADERS, ", ".join(request.parsed_headers))
        if policy.allow_credentials:
            headers = headers.with_header(ALLOW_CREDENTIALS, "true")
        if policy.max_age > 0:
            headers = headers.with_header(MAX_AGE, policy.max_age)

        self._trace("cors_preflight_headers", headers=headers.as_dict())
        return CorsDecision(
            preflight=True,
            allowed=True,
            checks=checks,
            headers=headers,
            vary=PREFLIGHT_VARY,
            status=PREFLIGHT_OK,
        )

    def decide_actual(self, request: CorsRequest) -> CorsDecision:
        policy = self._policy
        checks = self._run(ACTUAL_CHECKS, request)
        if not checks[-1].passed:
            self._trace("cors_actual_no_headers", check=checks[-1].name, reason=checks[-1].reason)
            return CorsDecision(preflight=False, allowed=False, checks=checks)

        headers = CorsHeaders().with_header(ALLOW_ORIGIN, policy.allow_origin_value(request.origin))
        if policy.exposed_headers:
            headers = headers.with_header(EXPOSE_HEADERS, ", ".join(policy.exposed_headers))
        if policy.allow_credentials:
            headers = headers.with_header(ALLOW_CREDENTIALS, "true")

        self._trace("cors_actual_headers", headers=headers.as_dict())
        return CorsDecision(
            preflight=False,
            allowed=True,
            checks=checks,
            headers=headers,
            vary=ACTUAL_VARY,
        )

    def _run(self, checks: Sequence[Check], request: CorsRequest) -> tuple[CheckResult, ...]:
        results = run_checks(checks, self._policy, request)
        for result in results:
            self._trace("cors_check", check=result.name, passed=result.passed, reason=result.reason or None)
        return results

    def _trace(self, event: str, **kwargs: object) -> None:
        if self._policy.debug:
            logger.debug(event, **kwargs)
