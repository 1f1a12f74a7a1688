"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el adaptador HTTP y la CLI lean credenciales de forma consistente.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://r1-api.dotmailer.com"


class ConfigurationError(ValueError):
    """Configuración incompleta detectada antes de emitir cualquier request."""


class ClientSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars / `.env`).
    - Un único contrato de configuración para CLI y adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOTMAILER_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    username: str | None = Field(
        default=None,
        description="Usuario de la API (API user).",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Password del usuario de la API.",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Dirección base del servicio REST.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="dotmailer-api-python/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
    log_json: bool = Field(
        default=False,
        description="Renderizar logs como JSON en lugar de consola.",
    )

    def require_credentials(self) -> tuple[str, str]:
        """Devuelve (username, password) o falla si falta alguno."""

        if not self.username or self.password is None:
            raise ConfigurationError(
                "Missing credentials: set DOTMAILER_USERNAME and DOTMAILER_PASSWORD"
            )
        return self.username, self.password.get_secret_value()
