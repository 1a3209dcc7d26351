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
"""PolicyConfig — the immutable, pre-normalised CORS policy and its predicates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from corsgate.cors.errors import CorsConfigurationError
from corsgate.cors.properties import CorsProperties

if TYPE_CHECKING:
    from corsgate.core.config import Config

WILDCARD = "*"
PREFLIGHT_METHOD = "OPTIONS"


def parse_header_list(header_list: str | None) -> list[str]:
    """Tokenize a comma-separated header list.

    Tokens are lower-cased and trimmed; empty tokens are dropped::

        >>> parse_header_list("X-Foo, x-bar ,,X-Baz")
        ['x-foo', 'x-bar', 'x-baz']
    """
    if not header_list:
        return []
    return [token.strip() for token in header_list.lower().split(",") if token.strip()]


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class PolicyConfig:
    """Normalised CORS policy, built once and shared read-only by every request.

    All comparison values are stored already lower- or upper-cased so the
    predicates only normalise the request side.  ``allow_all_origins`` makes
    ``plain_origins`` and ``wildcard_origins`` irrelevant.

    Use :meth:`build`, :meth:`from_properties` or :meth:`from_config` rather
    than the constructor; they perform the normalisation.
    """

    allow_all_origins: bool = False
    plain_origins: frozenset[str] = frozenset()
    wildcard_origins: tuple[tuple[str, str], ...] = ()
    allow_all_headers: bool = False
    allowed_headers: frozenset[str] = frozenset({"origin"})
    allowed_methods: frozenset[str] = frozenset()
    exposed_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 0
    options_passthrough: bool = False
    passthrough_rejected_preflight: bool = True
    debug: bool = False
    url_patterns: tuple[str, ...] = field(default=(), compare=False)
    exclude_patterns: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def build(
        cls,
        *,
        allowed_origins: Sequence[str] = (),
        allowed_methods: Sequence[str] = (),
        allowed_headers: Sequence[str] = (),
        exposed_headers: Sequence[str] = (),
        allow_credentials: bool = False,
        max_age: int = 0,
        options_passthrough: bool = False,
        passthrough_rejected_preflight: bool = True,
        debug: bool = False,
        url_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
    ) -> PolicyConfig:
        """Normalise raw policy values.

        Never fails: a malformed entry is kept as a literal that will not
        match anything.
        """
        allow_all_origins = False
        plain_origins: set[str] = set()
        wildcard_origins: list[tuple[str, str]] = []
        for raw in allowed_origins:
            origin = raw.lower()
            if origin == WILDCARD:
                # Nothing after a bare "*" can widen the policy further.
                allow_all_origins = True
                break
            if origin.count(WILDCARD) == 1:
                prefix, _, suffix = origin.partition(WILDCARD)
                wildcard_origins.append((prefix, suffix))
            else:
                plain_origins.add(origin)

        # Some browsers always list Origin in Access-Control-Request-Headers.
        headers = list(allowed_headers)
        if "Origin" not in headers:
            headers.append("Origin")

        return cls(
            allow_all_origins=allow_all_origins,
            plain_origins=frozenset(plain_origins),
            wildcard_origins=tuple(wildcard_origins),
            allow_all_headers=WILDCARD in headers,
            allowed_headers=frozenset(h.lower() for h in headers),
            allowed_methods=frozenset(m.upper() for m in allowed_methods),
            exposed_headers=_unique(h.lower() for h in exposed_headers),
            allow_credentials=allow_credentials,
            max_age=max_age,
            options_passthrough=options_passthrough,
            passthrough_rejected_preflight=passthrough_rejected_preflight,
            debug=debug,
            url_patterns=tuple(url_patterns),
            exclude_patterns=tuple(exclude_patterns),
        )

    @classmethod
    def from_properties(cls, properties: CorsProperties) -> PolicyConfig:
        return cls.build(
            allowed_origins=properties.allowed_origins,
            allowed_methods=properties.allowed_methods,
            allowed_headers=properties.allowed_headers,
            exposed_headers=properties.exposed_headers,
            allow_credentials=properties.allow_credentials,
            max_age=properties.max_age,
            options_passthrough=properties.options_passthrough,
            passthrough_rejected_preflight=properties.passthrough_rejected_preflight,
            debug=properties.debug,
            url_patterns=properties.url_patterns,
            exclude_patterns=properties.exclude_patterns,
        )

    @classmethod
    def from_config(cls, config: Config) -> PolicyConfig:
        """Bind ``corsgate.cors`` from *config* and normalise it.

        Raises:
            CorsConfigurationError: If the section does not have the
                expected shape (e.g. ``max_age: soon``).
        """
        try:
            properties = config.bind(CorsProperties)
        except ValueError as exc:
            raise CorsConfigurationError(str(exc)) from exc
        return cls.from_properties(properties)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_origin_allowed(self, origin: str) -> bool:
        if self.allow_all_origins:
            return True
        origin = origin.lower()
        if origin in self.plain_origins:
            return True
        # The "*" may stand for the empty string.
        return any(
            len(origin) >= len(prefix) + len(suffix) and origin.startswith(prefix) and origin.endswith(suffix)
            for prefix, suffix in self.wildcard_origins
        )

    def is_method_allowed(self, method: str) -> bool:
        if not self.allowed_methods:
            # Strict default: nothing configured means nothing allowed, preflight included.
            return False
        method = method.upper()
        if method == PREFLIGHT_METHOD:
            return True
        return method in self.allowed_methods

    def are_headers_allowed(self, headers: Iterable[str]) -> bool:
        """Check already lower-cased request header names against the policy."""
        if self.allow_all_headers or not self.allowed_headers:
            return True
        return all(header in self.allowed_headers for header in headers)

    def allow_origin_value(self, origin: str) -> str:
        """``Access-Control-Allow-Origin`` value for an allowed *origin*.

        ``*`` is never combined with credentials.
        """
        if self.allow_all_origins and not self.allow_credentials:
            return WILDCARD
        return origin
