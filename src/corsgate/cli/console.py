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
"""Shared Rich console and config loading for CLI commands."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.theme import Theme

from corsgate.core.config import Config
from corsgate.cors.errors import CorsConfigurationError
from corsgate.cors.policy import PolicyConfig
from corsgate.logging.structlog_adapter import StructlogAdapter

CORSGATE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "corsgate": "bold magenta",
    "dim": "dim",
})

console = Console(theme=CORSGATE_THEME)


def load_policy(config_path: str | None, profiles: tuple[str, ...] = ()) -> PolicyConfig:
    """Build the policy from *config_path*, or the current directory's corsgate files.

    Raises:
        click.ClickException: If the CORS section is malformed.
    """
    if config_path is not None:
        config = Config.from_file(Path(config_path), active_profiles=list(profiles))
    else:
        config = Config.from_sources(Path.cwd(), active_profiles=list(profiles))
    try:
        policy = PolicyConfig.from_config(config)
    except CorsConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    StructlogAdapter().configure(config)
    return policy
