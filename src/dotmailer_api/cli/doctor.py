"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from dotmailer_api.adapters.client import DotmailerClient
from dotmailer_api.core.config import ClientSettings
from dotmailer_api.core.domain.models import Request

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

# Cheap authenticated endpoint used as a connectivity probe.
PROBE_PATH = "/v2/account-info"


async def _check_api(settings: ClientSettings) -> tuple[bool, str]:
    async with DotmailerClient.from_settings(settings) as client:
        result = await client.get(Request.for_path(settings.base_url, PROBE_PATH))
    if result.succeeded:
        return True, f"HTTP {result.status_code}"
    return False, result.error_message or "unknown error"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()

    table = Table(title="dotmailer-api Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    has_credentials = bool(settings.username) and settings.password is not None
    if has_credentials:
        table.add_row("Credentials", "OK", f"API user {settings.username}")
    else:
        table.add_row("Credentials", "MISSING", "Set DOTMAILER_USERNAME and DOTMAILER_PASSWORD")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api = False
    if has_credentials:
        ok_api, detail_api = asyncio.run(_check_api(settings))
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API connectivity", "SKIPPED", "No credentials")

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)
