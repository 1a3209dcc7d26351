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
"""CorsProperties — raw CORS settings bound from ``corsgate.cors``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from corsgate.core.config import config_properties


@config_properties(prefix="corsgate.cors")
class CorsProperties(BaseModel):
    """Loosely-shaped CORS settings as written in configuration files.

    Both ``snake_case`` and ``camelCase`` keys are accepted, so a block copied
    from a Flow ``Settings.yaml`` (``allowedOrigins``, ``maxAge`` …) binds
    unchanged.  List fields also accept a comma-separated string, which is
    what an environment variable override delivers.

    Values are kept verbatim here; normalisation happens once in
    :meth:`corsgate.cors.policy.PolicyConfig.from_properties`.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    allowed_origins: list[str] = Field(default_factory=list)
    allowed_methods: list[str] = Field(default_factory=list)
    allowed_headers: list[str] = Field(default_factory=list)
    exposed_headers: list[str] = Field(default_factory=list)
    allow_credentials: bool = False
    max_age: int = Field(default=0, ge=0)
    options_passthrough: bool = False
    passthrough_rejected_preflight: bool = True
    debug: bool = False
    url_patterns: list[str] = Field(default_factory=list)
    exclude_patterns: list[str] = Field(default_factory=list)

    @field_validator(
        "allowed_origins",
        "allowed_methods",
        "allowed_headers",
        "exposed_headers",
        "url_patterns",
        "exclude_patterns",
        mode="before",
    )
    @classmethod
    def _split_comma_separated(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value
