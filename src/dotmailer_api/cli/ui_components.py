"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any

from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from dotmailer_api.core.domain.result import ServiceResult


def build_result_table(method: str, url: str, result: ServiceResult[Any]) -> Table:
    """Tabla Rich con el resumen de un `ServiceResult`."""

    table = Table(title=f"{method} {url}")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    status = Text("OK", style="green") if result.succeeded else Text("FAILED", style="red")
    table.add_row("Result", status)
    table.add_row("Status code", "-" if result.status_code is None else str(result.status_code))
    if not result.succeeded:
        table.add_row("Error kind", result.error_kind.value if result.error_kind else "-")
        table.add_row("Error", Text(result.error_message or "", style="red"))
    return table


def build_payload_panel(payload: Any) -> Panel:
    """Panel con el cuerpo de la respuesta formateado como JSON."""

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except ValueError:
            return Panel(Text(payload), title="Response", border_style="yellow")
    rendered = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return Panel(Syntax(rendered, "json", word_wrap=True), title="Response", border_style="green")
