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
"""Ordered, named CORS checks.

Each check inspects a :class:`CorsRequest` against a :class:`PolicyConfig`
and returns a :class:`CheckResult`.  Preflight requests run
``PREFLIGHT_CHECKS`` (origin, method, headers); actual requests run
``ACTUAL_CHECKS`` (origin, method).  Evaluation stops at the first failure.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from corsgate.cors.policy import PREFLIGHT_METHOD, PolicyConfig, parse_header_list

ORIGIN = "Origin"
REQUEST_METHOD = "Access-Control-Request-Method"
REQUEST_HEADERS = "Access-Control-Request-Headers"


@dataclass(frozen=True)
class CorsRequest:
    """The parts of an HTTP request the CORS engine looks at.

    ``origin`` is the empty string when the request carries no Origin.
    ``request_method`` / ``request_headers`` are ``None`` when absent.
    """

    method: str
    origin: str = ""
    request_method: str | None = None
    request_headers: str | None = None
    parsed_headers: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parsed_headers", tuple(parse_header_list(self.request_headers)))

    @classmethod
    def from_headers(cls, method: str, headers: Mapping[str, str]) -> CorsRequest:
        """Build a view from a case-insensitive header mapping (first value wins)."""
        return cls(
            method=method,
            origin=headers.get(ORIGIN) or "",
            request_method=headers.get(REQUEST_METHOD),
            request_headers=headers.get(REQUEST_HEADERS),
        )

    @property
    def is_preflight(self) -> bool:
        # Compared exactly as received, no case folding.
        return self.method == PREFLIGHT_METHOD


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    reason: str = ""


Check = Callable[[PolicyConfig, CorsRequest], CheckResult]


def check_origin_present(policy: PolicyConfig, request: CorsRequest) -> CheckResult:
    if not request.origin:
        return CheckResult("origin_present", False, "empty Origin header")
    return CheckResult("origin_present", True)


def check_origin_allowed(policy: PolicyConfig, request: CorsRequest) -> CheckResult:
    if not policy.is_origin_allowed(request.origin):
        return CheckResult("origin_allowed", False, f'origin "{request.origin}" not allowed')
    return CheckResult("origin_allowed", True)


def check_request_method_allowed(policy: PolicyConfig, request: CorsRequest) -> CheckResult:
    """Preflight: the method announced in Access-Control-Request-Method."""
    if request.request_method is None:
        return CheckResult("request_method_allowed", False, f"missing {REQUEST_METHOD} header")
    if not policy.is_method_allowed(request.request_method):
        return CheckResult(
            "request_method_allowed", False, f'method "{request.request_method}" not allowed'
        )
    return CheckResult("request_method_allowed", True)


def check_request_headers_allowed(policy: PolicyConfig, request: CorsRequest) -> CheckResult:
    if not policy.are_headers_allowed(request.parsed_headers):
        return CheckResult(
            "request_headers_allowed", False, f'headers "{request.request_headers}" not allowed'
        )
    return CheckResult("request_headers_allowed", True)


def check_method_allowed(policy: PolicyConfig, request: CorsRequest) -> CheckResult:
    """Actual request: the request's own method.

    CORS only gates methods at preflight, but withholding headers for
    unlisted simple methods (GET, POST) gives the policy control over them too.
    """
    if not policy.is_method_allowed(request.method):
        return CheckResult("method_allowed", False, f'method "{request.method}" not allowed')
    return CheckResult("method_allowed", True)


PREFLIGHT_CHECKS: tuple[Check, ...] = (
    check_origin_present,
    check_origin_allowed,
    check_request_method_allowed,
    check_request_headers_allowed,
)

ACTUAL_CHECKS: tuple[Check, ...] = (
    check_origin_present,
    check_origin_allowed,
    check_method_allowed,
)


def run_checks(
    checks: Sequence[Check], policy: PolicyConfig, request: CorsRequest
) -> tuple[CheckResult, ...]:
    """Run *checks* in order, stopping after the first failure.

    Returns every result produced; the last one is the failure, if any.
    """
    results: list[CheckResult] = []
    for check in checks:
        result = check(policy, request)
        results.append(result)
        if not result.passed:
            break
    return tuple(results)
