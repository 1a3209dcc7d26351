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
"""corsgate web — filter port, base filter and the default Starlette adapter."""

from corsgate.web.adapters.starlette import CorsFilter, WebFilterChainMiddleware, create_app
from corsgate.web.filters import OncePerRequestFilter
from corsgate.web.ordering import CORS_FILTER_ORDER, HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from corsgate.web.ports.filter import CallNext, WebFilter

__all__ = [
    # Framework-agnostic
    "CORS_FILTER_ORDER",
    "CallNext",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "OncePerRequestFilter",
    "WebFilter",
    "get_order",
    "order",
    # Default adapter (Starlette)
    "CorsFilter",
    "WebFilterChainMiddleware",
    "create_app",
]
