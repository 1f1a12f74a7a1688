"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts, headers y autenticación de cada cliente.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from dotmailer_api.core.config import ClientSettings
from dotmailer_api.core.domain.models import Credentials


def build_async_client(
    credentials: Credentials,
    base_url: str,
    settings: ClientSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` autenticado y ligado a `base_url`.

    Por qué un builder:
    - El header Basic se calcula una sola vez y queda fijo en el cliente.
    - Cada instancia tiene su propio transporte; no hay cliente global.
    """

    # Sin settings explícitos solo valen los defaults; el entorno lo lee `from_settings`.
    settings = settings or ClientSettings.model_construct()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Authorization": credentials.basic_auth_header(),
    }
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
