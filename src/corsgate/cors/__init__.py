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
"""corsgate CORS core — policy, checks, header building and decisions.

Everything in this package is framework-agnostic; the Starlette adapter
lives in :mod:`corsgate.web.adapters.starlette`.
"""

from corsgate.cors.checks import (
    ACTUAL_CHECKS,
    PREFLIGHT_CHECKS,
    CheckResult,
    CorsRequest,
    run_checks,
)
from corsgate.cors.engine import CorsDecision, CorsEngine
from corsgate.cors.errors import CorsConfigurationError, CorsgateException
from corsgate.cors.headers import CorsHeaders
from corsgate.cors.policy import PolicyConfig, parse_header_list
from corsgate.cors.properties import CorsProperties

__all__ = [
    "ACTUAL_CHECKS",
    "PREFLIGHT_CHECKS",
    "CheckResult",
    "CorsConfigurationError",
    "CorsDecision",
    "CorsEngine",
    "CorsHeaders",
    "CorsProperties",
    "CorsRequest",
    "CorsgateException",
    "PolicyConfig",
    "parse_header_list",
    "run_checks",
]
