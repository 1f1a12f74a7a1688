"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de lo que entra y sale por el cable sin acoplar el
  Core a httpx.
- Una única convención de nombres JSON (camelCase) para todos los DTOs.

Nota:
- Los DTOs de cada recurso (contactos, campañas, ...) viven fuera de este
  paquete; solo heredan de `ApiModel`; sus enums se leen por nombre.
"""

from __future__ import annotations

import base64
from typing import Any
from urllib.parse import urljoin

from pydantic import AliasChoices, BaseModel, Field, SecretStr, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from dotmailer_api.core.serialization import resolve_enum_names


class ApiModel(BaseModel):
    """Base de los DTOs que viajan por la API.

    Los campos se escriben en camelCase (`opt_in_type` -> `optInType`) y se
    aceptan tanto por alias como por nombre Python.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _enum_member_names(cls, value: Any, info: ValidationInfo) -> Any:
        # El servicio intercambia enums por nombre ("Double", no 2).
        if info.field_name is None:
            return value
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        return resolve_enum_names(field.annotation, value)


class Request(BaseModel):
    """Destino de una operación: URL absoluta ya compuesta por el llamador.

    El verbo no forma parte del valor; lo decide la operación invocada.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=1,
        description="URL absoluta del recurso.",
    )

    @classmethod
    def for_path(cls, base_url: str, path: str) -> "Request":
        """Compone la URL absoluta a partir de la dirección base."""

        return cls(url=urljoin(base_url.rstrip("/") + "/", path.lstrip("/")))


class ErrorInfo(BaseModel):
    """Cuerpo de error devuelto por el servicio en respuestas no-2xx."""

    model_config = ConfigDict(extra="ignore")

    message: str = Field(
        ...,
        validation_alias=AliasChoices("message", "Message"),
        description="Detalle legible del error reportado por el servidor.",
    )


class Credentials(BaseModel):
    """Par usuario/password de la API.

    Solo se usa en la construcción del cliente para derivar el header
    `Authorization`; el password queda como `SecretStr`.
    """

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    password: SecretStr

    def basic_auth_header(self) -> str:
        raw = f"{self.username}:{self.password.get_secret_value()}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")
