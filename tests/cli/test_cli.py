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
"""Tests for the corsgate CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from corsgate.cli.main import cli
from corsgate.logging.structlog_adapter import CORS_LOGGER_NAME

POLICY_YAML = """\
corsgate:
  cors:
    allowed_origins: ["https://app.com", "https://*.example.org"]
    allowed_methods: [GET, POST]
    allowed_headers: [X-Token]
    exposed_headers: [X-Total]
    max_age: 600
"""


@pytest.fixture(autouse=True)
def _reset_logging():
    root_handlers = logging.root.handlers[:]
    root_level = logging.root.level
    yield
    structlog.reset_defaults()
    logging.root.handlers[:] = root_handlers
    logging.root.setLevel(root_level)
    logging.getLogger(CORS_LOGGER_NAME).setLevel(logging.NOTSET)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "corsgate.yaml"
    path.write_text(POLICY_YAML)
    return path


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "policy" in result.output
        assert "check" in result.output


class TestPolicyCommand:
    def test_prints_normalised_policy(self, config_file: Path):
        result = CliRunner().invoke(cli, ["policy", "--config", str(config_file)])
        assert result.exit_code == 0, result.output
        assert "https://app.com" in result.output
        assert "https://*.example.org" in result.output
        assert "x-token" in result.output
        assert "600s" in result.output

    def test_warns_when_no_methods(self, tmp_path: Path):
        path = tmp_path / "corsgate.yaml"
        path.write_text("corsgate:\n  cors:\n    allowed_origins: ['*']\n")
        result = CliRunner().invoke(cli, ["policy", "--config", str(path)])
        assert result.exit_code == 0
        assert "every preflight will be rejected" in result.output

    def test_malformed_config_is_reported(self, tmp_path: Path):
        path = tmp_path / "corsgate.yaml"
        path.write_text("corsgate:\n  cors:\n    max_age: soon\n")
        result = CliRunner().invoke(cli, ["policy", "--config", str(path)])
        assert result.exit_code != 0
        assert "CorsProperties" in result.output

    def test_profile_overlay(self, config_file: Path):
        (config_file.parent / "corsgate-dev.yaml").write_text(
            "corsgate:\n  cors:\n    allowed_origins: ['http://localhost:*']\n"
        )
        result = CliRunner().invoke(cli, ["policy", "--config", str(config_file), "--profile", "dev"])
        assert result.exit_code == 0
        assert "http://localhost:*" in result.output

    def test_cors_debug_lowers_cors_logger(self, config_file: Path):
        (config_file.parent / "corsgate-trace.yaml").write_text("corsgate:\n  cors:\n    debug: true\n")
        result = CliRunner().invoke(cli, ["policy", "--config", str(config_file), "--profile", "trace"])
        assert result.exit_code == 0, result.output
        assert logging.getLogger(CORS_LOGGER_NAME).level == logging.DEBUG


class TestCheckCommand:
    def test_allowed_preflight(self, config_file: Path):
        result = CliRunner().invoke(
            cli,
            [
                "check",
                "--config", str(config_file),
                "--origin", "https://shop.example.org",
                "--request-method", "post",
                "--request-headers", "X-Token",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Allowed" in result.output
        assert "Access-Control-Allow-Methods" in result.output
        assert "POST" in result.output
        assert "Status: 200" in result.output

    def test_rejected_preflight(self, config_file: Path):
        result = CliRunner().invoke(
            cli,
            ["check", "--config", str(config_file), "--origin", "https://evil.com", "--request-method", "GET"],
        )
        assert result.exit_code == 1
        assert "Rejected" in result.output
        assert "origin_allowed" in result.output
        assert "Status: 401" in result.output

    def test_actual_request(self, config_file: Path):
        result = CliRunner().invoke(
            cli, ["check", "--config", str(config_file), "--method", "GET", "--origin", "https://app.com"]
        )
        assert result.exit_code == 0
        assert "Access-Control-Expose-Headers" in result.output

    def test_actual_request_without_origin(self, config_file: Path):
        result = CliRunner().invoke(cli, ["check", "--config", str(config_file), "--method", "GET"])
        assert result.exit_code == 1
        assert "No CORS headers" in result.output
