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
"""'corsgate check' — Evaluate a request against the configured policy."""

from __future__ import annotations

import click
from rich.table import Table

from corsgate.cli.console import console, load_policy
from corsgate.cors.checks import CorsRequest
from corsgate.cors.engine import CorsEngine


@click.command()
@click.option("--origin", default="", help="Value of the Origin header (omit for none).")
@click.option("--method", default="OPTIONS", show_default=True, help="HTTP method of the request.")
@click.option("--request-method", default=None, help="Access-Control-Request-Method (preflight).")
@click.option("--request-headers", default=None, help="Access-Control-Request-Headers (preflight).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML or TOML config file (default: corsgate.yaml in the current directory).")
@click.option("--profile", "profiles", multiple=True, help="Active profile overlay (repeatable).")
def check_command(
    origin: str,
    method: str,
    request_method: str | None,
    request_headers: str | None,
    config_path: str | None,
    profiles: tuple[str, ...],
) -> None:
    """Show how the filter would answer a request.

    Exits 0 when the request is allowed and 1 when a preflight is rejected or
    an actual request gets no CORS headers.
    """
    engine = CorsEngine(load_policy(config_path, profiles))
    request = CorsRequest(
        method=method,
        origin=origin,
        request_method=request_method,
        request_headers=request_headers,
    )
    decision = engine.decide(request)

    kind = "Preflight" if decision.preflight else "Actual request"
    console.print(f"\n[corsgate]{kind}[/corsgate] [dim]{method} from {origin or '(no origin)'}[/dim]\n")

    checks = Table(title="Checks", border_style="dim")
    checks.add_column("Check", style="info")
    checks.add_column("Result")
    checks.add_column("Reason", style="dim")
    for result in decision.checks:
        status = "[success]pass[/success]" if result.passed else "[error]fail[/error]"
        checks.add_row(result.name, status, result.reason)
    console.print(checks)

    headers = Table(title="\nResponse headers", border_style="dim")
    headers.add_column("Header", style="info")
    headers.add_column("Value")
    if decision.vary is not None:
        headers.add_row("Vary", decision.vary)
    for name, value in decision.headers:
        headers.add_row(name, value)
    console.print(headers)

    if decision.status is not None:
        console.print(f"\nStatus: {decision.status}")

    if decision.allowed:
        console.print("[success]Allowed[/success]\n")
    else:
        verdict = "Rejected" if decision.preflight else "No CORS headers"
        console.print(f"[error]{verdict}[/error]\n")
        click.get_current_context().exit(1)
