"""Cliente REST: punto único de ejecución de requests.

Responsabilidad:
- Enviar cada verbo (GET/POST/PUT/DELETE) por un mismo camino (`send`).
- Serializar el cuerpo y deserializar la respuesta con una configuración fija.
- Clasificar el resultado y devolverlo como `ServiceResult`, sin lanzar.

Reglas de clasificación:
- Excepción de transporte o de parseo -> "An exception occurred: ...".
- 2xx -> éxito (con valor tipado si se pidió `response_type`).
- Otro código -> "Failed to <METHOD> object (...)" a partir de `ErrorInfo`.
  Si el cuerpo de error no se puede leer, cae en la primera regla.
"""

from __future__ import annotations

from typing import Any, Final, TypeVar, overload

import httpx
import structlog

from dotmailer_api.adapters.http_client import build_async_client
from dotmailer_api.core.config import DEFAULT_BASE_URL, ClientSettings
from dotmailer_api.core.domain.models import Credentials, ErrorInfo, Request
from dotmailer_api.core.domain.result import ErrorKind, ServiceResult
from dotmailer_api.core.serialization import SerializationConfig

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class _NoBody:
    def __repr__(self) -> str:
        return "NO_BODY"


NO_BODY: Final = _NoBody()


def status_description(status_code: int) -> str:
    """Nombre del código HTTP en PascalCase (`400` -> `BadRequest`)."""

    try:
        name = httpx.codes(status_code).name
    except ValueError:
        return str(status_code)
    return "".join(part.capitalize() for part in name.split("_"))


def exception_message(exc: BaseException) -> str:
    return f"An exception occurred: {type(exc).__name__}: {exc}"


class DotmailerClient:
    """Ejecutor de requests autenticados contra la API.

    El transporte y la configuración de serialización se fijan en el
    constructor y no cambian; varias corrutinas pueden usar la misma
    instancia a la vez.
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self._serializer = SerializationConfig()
        self._http = build_async_client(
            Credentials(username=username, password=password),
            base_url,
            settings,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "DotmailerClient":
        settings = settings or ClientSettings()
        username, password = settings.require_credentials()
        return cls(
            username,
            password,
            settings.base_url,
            settings=settings,
            transport=transport,
        )

    @property
    def serializer(self) -> SerializationConfig:
        return self._serializer

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "DotmailerClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- verbos -----------------------------------------------------------

    @overload
    async def get(self, request: Request) -> ServiceResult[None]: ...

    @overload
    async def get(self, request: Request, response_type: type[T]) -> ServiceResult[T]: ...

    async def get(self, request: Request, response_type: Any = None) -> ServiceResult[Any]:
        return await self.send("GET", request, response_type=response_type)

    async def post(
        self,
        request: Request,
        data: Any = NO_BODY,
        response_type: Any = None,
    ) -> ServiceResult[Any]:
        """POST con cuerpo opcional.

        Sin `response_type`, la respuesta se lee como el tipo de `data`.
        Sin `data`, se envía un cuerpo vacío.
        """

        if response_type is None and data is not NO_BODY:
            response_type = type(data)
        return await self.send("POST", request, data=data, response_type=response_type)

    async def put(
        self,
        request: Request,
        data: Any,
        response_type: Any = None,
    ) -> ServiceResult[Any]:
        if response_type is None:
            response_type = type(data)
        return await self.send("PUT", request, data=data, response_type=response_type)

    @overload
    async def delete(self, request: Request) -> ServiceResult[None]: ...

    @overload
    async def delete(self, request: Request, response_type: type[T]) -> ServiceResult[T]: ...

    async def delete(self, request: Request, response_type: Any = None) -> ServiceResult[Any]:
        return await self.send("DELETE", request, response_type=response_type)

    # -- pipeline ---------------------------------------------------------

    async def send(
        self,
        method: str,
        request: Request,
        *,
        data: Any = NO_BODY,
        response_type: Any = None,
    ) -> ServiceResult[Any]:
        """Ejecuta un request y lo resuelve a exactamente un `ServiceResult`.

        `asyncio.CancelledError` no se captura: una llamada cancelada no
        produce sobre.
        """

        method = method.upper()
        log = logger.bind(method=method, url=request.url)
        try:
            content: bytes | None = None
            headers: dict[str, str] = {}
            if data is not NO_BODY:
                content = self._serializer.dumps(data)
                headers["Content-Type"] = "application/json"

            response = await self._http.request(
                method, request.url, content=content, headers=headers
            )
            log.debug("request.sent", status_code=response.status_code)
            result = self._classify(response, response_type)
        except Exception as exc:
            log.warning("request.failed", error_kind=ErrorKind.TRANSPORT.value, error=str(exc))
            return ServiceResult.failure(exception_message(exc), kind=ErrorKind.TRANSPORT)

        if not result.succeeded:
            log.warning(
                "request.failed",
                error_kind=ErrorKind.SERVICE.value,
                status_code=result.status_code,
            )
        return result

    def _classify(self, response: httpx.Response, response_type: Any) -> ServiceResult[Any]:
        if response.is_success:
            if response_type is None:
                return ServiceResult.success(raw=response.text, status_code=response.status_code)
            if not response.content:
                # 204 y similares: sin cuerpo no hay nada que deserializar.
                return ServiceResult.success(None, status_code=response.status_code)
            value = self._serializer.loads(response.content, response_type)
            return ServiceResult.success(value, status_code=response.status_code)
        return ServiceResult.failure(
            self._error_message(response),
            kind=ErrorKind.SERVICE,
            status_code=response.status_code,
        )

    def _error_message(self, response: httpx.Response) -> str:
        # Un cuerpo ilegible propaga la excepción al límite de `send`.
        info = self._serializer.loads(response.content, ErrorInfo)
        return (
            f"Failed to {response.request.method} object "
            f"(Status Code: {response.status_code}, "
            f"Status Description: {status_description(response.status_code)}, "
            f"Detail: {info.message})"
        )
