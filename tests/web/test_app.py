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
"""Tests for the create_app() factory."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from corsgate.core.config import Config
from corsgate.cors.errors import CorsConfigurationError
from corsgate.cors.policy import PolicyConfig
from corsgate.logging.structlog_adapter import CORS_LOGGER_NAME
from corsgate.web.adapters.starlette.app import create_app
from corsgate.web.filters import OncePerRequestFilter


@pytest.fixture(autouse=True)
def _reset_logging():
    root_handlers = logging.root.handlers[:]
    root_level = logging.root.level
    yield
    structlog.reset_defaults()
    logging.root.handlers[:] = root_handlers
    logging.root.setLevel(root_level)
    logging.getLogger(CORS_LOGGER_NAME).setLevel(logging.NOTSET)
    logging.getLogger("corsgate.web").setLevel(logging.NOTSET)


async def hello(request: Request) -> JSONResponse:
    return JSONResponse({"msg": "hello"})


HELLO_ROUTE = Route("/hello", hello)


class _StampFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Stamp"] = "1"
        return response


class TestCreateAppWithPolicy:
    def test_simple_request(self):
        app = create_app(
            policy=PolicyConfig.build(allowed_origins=["http://example.com"], allowed_methods=["GET"]),
            routes=[HELLO_ROUTE],
        )
        resp = TestClient(app).get("/hello", headers={"Origin": "http://example.com"})
        assert resp.status_code == 200
        assert resp.json() == {"msg": "hello"}
        assert resp.headers["access-control-allow-origin"] == "http://example.com"

    def test_extra_filters_share_the_chain(self):
        app = create_app(
            policy=PolicyConfig.build(allowed_origins=["*"], allowed_methods=["GET"]),
            routes=[HELLO_ROUTE],
            filters=[_StampFilter()],
        )
        resp = TestClient(app).get("/hello", headers={"Origin": "http://example.com"})
        assert resp.headers["X-Stamp"] == "1"
        assert resp.headers["access-control-allow-origin"] == "*"


class TestCreateAppWithConfig:
    def test_policy_from_config(self):
        config = Config(
            {
                "corsgate": {
                    "cors": {
                        "allowed_origins": ["http://example.com"],
                        "allowed_methods": ["GET", "POST"],
                        "max_age": 300,
                    }
                }
            }
        )
        app = create_app(config=config, routes=[HELLO_ROUTE])
        resp = TestClient(app).options(
            "/hello",
            headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-methods"] == "POST"
        assert resp.headers["access-control-max-age"] == "300"

    def test_policy_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "corsgate.yaml"
        config_file.write_text(
            "corsgate:\n"
            "  cors:\n"
            "    allowedOrigins: ['https://*.example.com']\n"
            "    allowedMethods: [GET]\n"
        )
        app = create_app(config=Config.from_file(config_file), routes=[HELLO_ROUTE])
        resp = TestClient(app).get("/hello", headers={"Origin": "https://shop.example.com"})
        assert resp.headers["access-control-allow-origin"] == "https://shop.example.com"

    def test_defaults_add_no_cors_headers(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        app = create_app(routes=[HELLO_ROUTE])
        resp = TestClient(app).get("/hello", headers={"Origin": "http://example.com"})
        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers

    def test_malformed_config_fails_at_startup(self):
        config = Config({"corsgate": {"cors": {"max_age": "later"}}})
        with pytest.raises(CorsConfigurationError):
            create_app(config=config)


class TestCreateAppLogging:
    def test_cors_debug_lowers_cors_logger(self):
        config = Config(
            {
                "corsgate": {
                    "cors": {"allowed_origins": ["http://example.com"], "allowed_methods": ["GET"], "debug": True}
                }
            }
        )
        create_app(config=config, routes=[HELLO_ROUTE])
        assert logging.getLogger(CORS_LOGGER_NAME).level == logging.DEBUG

    def test_module_levels_are_applied(self):
        config = Config({"corsgate": {"logging": {"level": {"root": "INFO", "corsgate.web": "WARNING"}}}})
        create_app(config=config, routes=[HELLO_ROUTE])
        assert logging.getLogger("corsgate.web").level == logging.WARNING
        assert logging.getLogger(CORS_LOGGER_NAME).level == logging.NOTSET

    def test_policy_only_leaves_logging_alone(self):
        create_app(
            policy=PolicyConfig.build(allowed_origins=["*"], allowed_methods=["GET"], debug=True),
            routes=[HELLO_ROUTE],
        )
        assert logging.getLogger(CORS_LOGGER_NAME).level == logging.NOTSET
