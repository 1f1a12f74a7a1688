"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2).
- El dominio no conoce httpx ni la CLI: solo requests, credenciales y resultados.
"""

from dotmailer_api.core.domain.models import ApiModel, Credentials, ErrorInfo, Request
from dotmailer_api.core.domain.result import ErrorKind, ServiceResult

__all__ = [
    "ApiModel",
    "Credentials",
    "ErrorInfo",
    "ErrorKind",
    "Request",
    "ServiceResult",
]
