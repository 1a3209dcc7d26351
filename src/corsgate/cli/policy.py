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
"""'corsgate policy' — Show the normalised CORS policy."""

from __future__ import annotations

from collections.abc import Iterable

import click
from rich.table import Table

from corsgate.cli.console import console, load_policy


def _join(values: Iterable[str]) -> str:
    items = list(values)
    return ", ".join(items) if items else "[dim](none)[/dim]"


@click.command()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML or TOML config file (default: corsgate.yaml in the current directory).")
@click.option("--profile", "profiles", multiple=True, help="Active profile overlay (repeatable).")
def policy_command(config_path: str | None, profiles: tuple[str, ...]) -> None:
    """Print the CORS policy as the filter will apply it."""
    policy = load_policy(config_path, profiles)

    table = Table(title="[corsgate]CORS Policy[/corsgate]", show_header=False, border_style="dim")
    table.add_column("Setting", style="info")
    table.add_column("Value")

    if policy.allow_all_origins:
        table.add_row("Origins", "* (any origin)")
    else:
        table.add_row("Origins", _join(sorted(policy.plain_origins)))
        table.add_row("Wildcard origins", _join(f"{p}*{s}" for p, s in policy.wildcard_origins))
    table.add_row("Methods", _join(sorted(policy.allowed_methods)))
    table.add_row("Headers", "* (any header)" if policy.allow_all_headers else _join(sorted(policy.allowed_headers)))
    table.add_row("Exposed headers", _join(policy.exposed_headers))
    table.add_row("Credentials", str(policy.allow_credentials).lower())
    table.add_row("Max age", f"{policy.max_age}s" if policy.max_age > 0 else "[dim](omitted)[/dim]")
    table.add_row("OPTIONS passthrough", str(policy.options_passthrough).lower())
    if policy.options_passthrough:
        table.add_row("Passthrough on rejection", str(policy.passthrough_rejected_preflight).lower())
    table.add_row("Debug", str(policy.debug).lower())

    console.print(table)

    if not policy.allowed_methods:
        console.print("[warning]No methods configured: every preflight will be rejected.[/warning]")
