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
"""Tests for CorsProperties binding."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from corsgate.core.config import Config
from corsgate.cors.properties import CorsProperties


class TestCorsPropertiesDefaults:
    def test_defaults_are_strict(self):
        props = CorsProperties()
        assert props.allowed_origins == []
        assert props.allowed_methods == []
        assert props.allowed_headers == []
        assert props.exposed_headers == []
        assert props.allow_credentials is False
        assert props.max_age == 0
        assert props.options_passthrough is False
        assert props.passthrough_rejected_preflight is True
        assert props.debug is False


class TestCorsPropertiesParsing:
    def test_camel_case_aliases(self):
        props = CorsProperties.model_validate(
            {"allowedOrigins": ["https://app.com"], "allowCredentials": True, "optionsPassthrough": True}
        )
        assert props.allowed_origins == ["https://app.com"]
        assert props.allow_credentials is True
        assert props.options_passthrough is True

    def test_comma_separated_string_becomes_list(self):
        props = CorsProperties.model_validate({"allowed_methods": "GET, POST,,PUT"})
        assert props.allowed_methods == ["GET", "POST", "PUT"]

    def test_null_list_becomes_empty(self):
        props = CorsProperties.model_validate({"exposed_headers": None})
        assert props.exposed_headers == []

    def test_negative_max_age_rejected(self):
        with pytest.raises(ValidationError):
            CorsProperties.model_validate({"max_age": -1})


class TestCorsPropertiesBinding:
    def test_bind_from_config(self):
        config = Config({"corsgate": {"cors": {"allowed_origins": ["https://a.com"], "max_age": 60}}})
        props = config.bind(CorsProperties)
        assert props.allowed_origins == ["https://a.com"]
        assert props.max_age == 60

    def test_env_overrides_field(self, monkeypatch):
        monkeypatch.setenv("CORSGATE_CORS_ALLOWED_ORIGINS", "https://env.com, https://*.env.org")
        monkeypatch.setenv("CORSGATE_CORS_ALLOW_CREDENTIALS", "true")
        monkeypatch.setenv("CORSGATE_CORS_MAX_AGE", "120")
        config = Config({"corsgate": {"cors": {"allowed_origins": ["https://file.com"]}}})
        props = config.bind(CorsProperties)
        assert props.allowed_origins == ["https://env.com", "https://*.env.org"]
        assert props.allow_credentials is True
        assert props.max_age == 120

    def test_bind_failure_is_value_error(self):
        config = Config({"corsgate": {"cors": {"max_age": "never"}}})
        with pytest.raises(ValueError, match="CorsProperties"):
            config.bind(CorsProperties)
