"""Resultado uniforme de cada operación del cliente.

Por qué un sobre en lugar de excepciones:
- El llamador siempre recibe un valor; decide con `succeeded` sin try/except.
- Los dos tipos de fallo (transporte y servicio) son variantes etiquetadas
  con `ErrorKind`, no subclases de excepción.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Origen de un fallo."""

    TRANSPORT = "transport"
    SERVICE = "service"


class ServiceResult(BaseModel, Generic[T]):
    """Sobre éxito/fallo con valor tipado o mensaje de error.

    En un resultado fallido `value` es `None` (placeholder), nunca una
    instancia a medio construir: hay que mirar `succeeded`, no el valor.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    succeeded: bool = Field(
        ...,
        description="True si la operación terminó con una respuesta 2xx procesada.",
    )
    value: T | None = Field(
        default=None,
        description="Payload deserializado (solo en éxito tipado).",
    )
    error_message: str | None = Field(
        default=None,
        description="Mensaje legible del fallo (solo en fallo).",
    )
    error_kind: ErrorKind | None = Field(
        default=None,
        description="Variante del fallo: transporte o servicio.",
    )
    status_code: int | None = Field(
        default=None,
        description="Código HTTP si llegó a recibirse una respuesta.",
    )
    raw: str | None = Field(
        default=None,
        description="Texto de la respuesta en operaciones sin payload tipado.",
    )

    @classmethod
    def success(
        cls,
        value: Any = None,
        *,
        raw: str | None = None,
        status_code: int | None = None,
    ) -> "ServiceResult[Any]":
        return cls(succeeded=True, value=value, raw=raw, status_code=status_code)

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        kind: ErrorKind,
        status_code: int | None = None,
    ) -> "ServiceResult[Any]":
        return cls(
            succeeded=False,
            error_message=message,
            error_kind=kind,
            status_code=status_code,
        )

    def __bool__(self) -> bool:
        return self.succeeded
