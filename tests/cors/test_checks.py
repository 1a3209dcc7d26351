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
"""Tests for the request view and the ordered check sequences."""

from __future__ import annotations

from starlette.datastructures import Headers

from corsgate.cors.checks import (
    ACTUAL_CHECKS,
    PREFLIGHT_CHECKS,
    CorsRequest,
    check_method_allowed,
    check_origin_allowed,
    check_origin_present,
    check_request_headers_allowed,
    check_request_method_allowed,
    run_checks,
)
from corsgate.cors.policy import PolicyConfig

POLICY = PolicyConfig.build(
    allowed_origins=["https://app.com"],
    allowed_methods=["GET", "POST"],
    allowed_headers=["X-Token"],
)


# ---------------------------------------------------------------------------
# CorsRequest
# ---------------------------------------------------------------------------


class TestCorsRequest:
    def test_from_headers_is_case_insensitive(self):
        headers = Headers(
            {
                "origin": "https://app.com",
                "access-control-request-method": "POST",
                "ACCESS-CONTROL-REQUEST-HEADERS": "X-Token, Content-Type",
            }
        )
        request = CorsRequest.from_headers("OPTIONS", headers)
        assert request.origin == "https://app.com"
        assert request.request_method == "POST"
        assert request.request_headers == "X-Token, Content-Type"
        assert request.parsed_headers == ("x-token", "content-type")

    def test_missing_headers(self):
        request = CorsRequest.from_headers("GET", Headers({}))
        assert request.origin == ""
        assert request.request_method is None
        assert request.request_headers is None
        assert request.parsed_headers == ()

    def test_preflight_classification_is_case_sensitive(self):
        assert CorsRequest("OPTIONS").is_preflight
        assert not CorsRequest("options").is_preflight
        assert not CorsRequest("GET").is_preflight


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


class TestIndividualChecks:
    def test_origin_present(self):
        assert check_origin_present(POLICY, CorsRequest("GET", origin="https://app.com")).passed
        result = check_origin_present(POLICY, CorsRequest("GET"))
        assert not result.passed
        assert result.name == "origin_present"

    def test_origin_allowed_reason_names_origin(self):
        result = check_origin_allowed(POLICY, CorsRequest("GET", origin="https://evil.com"))
        assert not result.passed
        assert "https://evil.com" in result.reason

    def test_missing_request_method_fails(self):
        result = check_request_method_allowed(POLICY, CorsRequest("OPTIONS", origin="https://app.com"))
        assert not result.passed
        assert "Access-Control-Request-Method" in result.reason

    def test_request_method_is_case_insensitive(self):
        request = CorsRequest("OPTIONS", origin="https://app.com", request_method="post")
        assert check_request_method_allowed(POLICY, request).passed

    def test_request_headers(self):
        ok = CorsRequest("OPTIONS", request_headers="X-Token, Origin")
        bad = CorsRequest("OPTIONS", request_headers="X-Token, X-Secret")
        assert check_request_headers_allowed(POLICY, ok).passed
        assert not check_request_headers_allowed(POLICY, bad).passed

    def test_actual_method(self):
        assert check_method_allowed(POLICY, CorsRequest("GET")).passed
        assert not check_method_allowed(POLICY, CorsRequest("DELETE")).passed


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------


class TestCheckSequences:
    def test_preflight_sequence_order(self):
        request = CorsRequest(
            "OPTIONS", origin="https://app.com", request_method="POST", request_headers="X-Token"
        )
        results = run_checks(PREFLIGHT_CHECKS, POLICY, request)
        assert [r.name for r in results] == [
            "origin_present",
            "origin_allowed",
            "request_method_allowed",
            "request_headers_allowed",
        ]
        assert all(r.passed for r in results)

    def test_actual_sequence_order(self):
        results = run_checks(ACTUAL_CHECKS, POLICY, CorsRequest("GET", origin="https://app.com"))
        assert [r.name for r in results] == ["origin_present", "origin_allowed", "method_allowed"]

    def test_stops_at_first_failure(self):
        request = CorsRequest("OPTIONS", origin="https://evil.com", request_method="DELETE")
        results = run_checks(PREFLIGHT_CHECKS, POLICY, request)
        assert [r.name for r in results] == ["origin_present", "origin_allowed"]
        assert not results[-1].passed

    def test_missing_origin_fails_first(self):
        results = run_checks(ACTUAL_CHECKS, POLICY, CorsRequest("GET"))
        assert len(results) == 1
        assert results[0].name == "origin_present"
