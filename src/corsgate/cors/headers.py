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
"""CorsHeaders — immutable accumulator of the CORS response headers to emit."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

VARY = "Vary"
ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
MAX_AGE = "Access-Control-Max-Age"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"

PREFLIGHT_VARY = "Origin, Access-Control-Request-Method, Access-Control-Request-Headers"
ACTUAL_VARY = "Origin"


@dataclass(frozen=True)
class CorsHeaders:
    """An ordered set of header writes.

    ``with_header`` returns a new instance; an existing name is replaced in
    place so the emission order stays stable.  ``Vary`` is not tracked here;
    see :attr:`corsgate.cors.engine.CorsDecision.vary`.
    """

    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str | int) -> CorsHeaders:
        value = str(value)
        replaced = False
        items: list[tuple[str, str]] = []
        for existing, old in self.headers:
            if existing.lower() == name.lower():
                items.append((name, value))
                replaced = True
            else:
                items.append((existing, old))
        if not replaced:
            items.append((name, value))
        return CorsHeaders(tuple(items))

    def get(self, name: str, default: str | None = None) -> str | None:
        for existing, value in self.headers:
            if existing.lower() == name.lower():
                return value
        return default

    def as_dict(self) -> dict[str, str]:
        return dict(self.headers)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.headers)

    def __len__(self) -> int:
        return len(self.headers)

    def __bool__(self) -> bool:
        return bool(self.headers)
