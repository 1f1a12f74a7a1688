"""Cliente tipado y asíncrono para la API REST de dotMailer."""

from dotmailer_api.adapters.client import NO_BODY, DotmailerClient
from dotmailer_api.core.config import DEFAULT_BASE_URL, ClientSettings, ConfigurationError
from dotmailer_api.core.domain import (
    ApiModel,
    Credentials,
    ErrorInfo,
    ErrorKind,
    Request,
    ServiceResult,
)
from dotmailer_api.core.serialization import SerializationConfig

__all__ = [
    "DEFAULT_BASE_URL",
    "NO_BODY",
    "ApiModel",
    "ClientSettings",
    "ConfigurationError",
    "Credentials",
    "DotmailerClient",
    "ErrorInfo",
    "ErrorKind",
    "Request",
    "SerializationConfig",
    "ServiceResult",
]
