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
"""Exceptions raised while assembling a CORS policy.

Request evaluation itself never raises: a request is either allowed or
rejected.  Only configuration binding can fail, and it fails at startup.
"""

from __future__ import annotations


class CorsgateException(Exception):
    """Base exception for corsgate errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFIG").
        context: Arbitrary key-value pairs for debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class CorsConfigurationError(CorsgateException, ValueError):
    """The ``corsgate.cors`` section could not be bound to CorsProperties."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CORS_CONFIG", context=context)
