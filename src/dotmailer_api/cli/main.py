"""CLI `dotmailer`: requests ad-hoc contra la API configurada."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import typer
from rich.console import Console

from dotmailer_api.adapters.client import NO_BODY, DotmailerClient
from dotmailer_api.cli import doctor
from dotmailer_api.cli.ui_components import build_payload_panel, build_result_table
from dotmailer_api.core.config import ClientSettings, ConfigurationError
from dotmailer_api.core.domain.models import Request
from dotmailer_api.core.domain.result import ServiceResult
from dotmailer_api.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True, help="Issue authenticated requests against the dotMailer REST API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _parse_data(data: Optional[str]) -> Any:
    if data is None:
        return NO_BODY
    try:
        return json.loads(data)
    except ValueError as exc:
        raise typer.BadParameter(f"--data is not valid JSON: {exc}") from exc


async def _execute(
    settings: ClientSettings,
    method: str,
    request: Request,
    *,
    data: Any,
    response_type: Any,
) -> ServiceResult[Any]:
    async with DotmailerClient.from_settings(settings) as client:
        return await client.send(method, request, data=data, response_type=response_type)


def _run(method: str, path: str, *, data: Any = NO_BODY, raw: bool = False) -> None:
    settings = ClientSettings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    request = Request.for_path(settings.base_url, path)
    try:
        result = asyncio.run(
            _execute(
                settings,
                method,
                request,
                data=data,
                response_type=None if raw else Any,
            )
        )
    except ConfigurationError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc

    _console.print(build_result_table(method, request.url, result))
    if result.succeeded:
        payload = result.raw if raw else result.value
        if payload not in (None, ""):
            _console.print(build_payload_panel(payload))
    else:
        raise typer.Exit(code=1)


@app.command()
def get(
    path: str = typer.Argument(..., help="Resource path relative to the base URL (or an absolute URL)."),
    raw: bool = typer.Option(False, "--raw", help="Do not parse the response body as JSON."),
) -> None:
    """GET a resource."""

    _run("GET", path, raw=raw)


@app.command()
def post(
    path: str = typer.Argument(..., help="Resource path relative to the base URL (or an absolute URL)."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON request body."),
    raw: bool = typer.Option(False, "--raw", help="Do not parse the response body as JSON."),
) -> None:
    """POST to a resource (empty body when --data is omitted)."""

    _run("POST", path, data=_parse_data(data), raw=raw)


@app.command()
def put(
    path: str = typer.Argument(..., help="Resource path relative to the base URL (or an absolute URL)."),
    data: str = typer.Option(..., "--data", "-d", help="JSON request body."),
    raw: bool = typer.Option(False, "--raw", help="Do not parse the response body as JSON."),
) -> None:
    """PUT a resource."""

    _run("PUT", path, data=_parse_data(data), raw=raw)


@app.command()
def delete(
    path: str = typer.Argument(..., help="Resource path relative to the base URL (or an absolute URL)."),
) -> None:
    """DELETE a resource."""

    _run("DELETE", path, raw=True)


def run() -> None:
    app()
