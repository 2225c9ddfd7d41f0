"""Wrapper de httpx: el invocador genérico de ambos clientes.

Responsabilidad:
- Serializar el body a JSON, firmar con `Authorization: Bearer <key>` y
  enviar un único request (sin retries ni rate limiting).
- Decodificar la respuesta 2xx al tipo pedido (cualquier tipo que entienda
  `pydantic.TypeAdapter`).
- Delegar las respuestas >= 400 al parser de envelope de cada servicio.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Callable, Mapping, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from gatsbie import __version__
from gatsbie.core.config import DEFAULT_TIMEOUT_SECONDS, GatsbieSettings
from gatsbie.core.errors import (
    APIError,
    DecodeError,
    RequestTimeoutError,
    SerializationError,
    TransportError,
)

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")

# Recibe (status, body crudo) y devuelve la excepción a lanzar.
ErrorParser = Callable[[int, bytes], Exception]

USER_AGENT = f"gatsbie-python/{__version__}"


def build_async_client(
    *,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults del SDK.

    `transport` permite inyectar un transporte propio (proxies, mocks).
    """

    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS),
        headers=headers,
        transport=transport,
    )


@lru_cache(maxsize=None)
def _adapter_for(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def encode_body(body: Any) -> bytes:
    """Serializa el body a JSON (modelos pydantic incluidos)."""

    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True)
    try:
        return json.dumps(body, ensure_ascii=False, allow_nan=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"failed to marshal request: {exc}") from exc


class JSONTransport:
    """Un request HTTP/JSON autenticado contra una base URL fija.

    No guarda estado por llamada: una instancia puede usarse desde varias
    tareas a la vez. El `httpx.AsyncClient` se comparte (pool de conexiones).
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        http_client: httpx.AsyncClient,
        error_parser: ErrorParser,
        prefix: str = "gatsbie",
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = http_client
        self._error_parser = error_parser
        self._prefix = prefix
        # Por request: no se toca la config del AsyncClient compartido.
        self._timeout = httpx.Timeout(timeout) if timeout is not None else httpx.USE_CLIENT_DEFAULT

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    def _headers(self) -> dict[str, str]:
        # También cuando el caller inyecta su propio AsyncClient.
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
            "Authorization": f"Bearer {self._api_key}",
        }

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        result_type: type[ResultT] | Any = None,
    ) -> Any:
        """Ejecuta el request y devuelve el resultado decodificado.

        Raises:
            SerializationError: el body no es serializable (no se envía nada).
            RequestTimeoutError: expiró el timeout de httpx.
            TransportError: fallo de red/conexión.
            DecodeError: respuesta 2xx que no encaja con `result_type`.
            APIError: respuesta >= 400 (subclase según el servicio).
        """

        content = encode_body(body) if body is not None else None
        url = f"{self._base_url}{path}"

        logger.debug("%s: %s %s", self._prefix, method, path)
        started = time.monotonic()
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                content=content,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"{self._prefix}: request timed out: {exc}", cause=exc) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"{self._prefix}: request failed: {exc}", cause=exc) from exc

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug(
            "%s: %s %s -> %s (%.0f ms)", self._prefix, method, path, response.status_code, elapsed_ms
        )

        raw = response.content
        if response.status_code >= 400:
            raise self._error_parser(response.status_code, raw)

        if result_type is None:
            return None

        try:
            return _adapter_for(result_type).validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(
                f"{self._prefix}: failed to unmarshal response: {exc}",
                http_status=response.status_code,
                body=raw.decode("utf-8", errors="replace"),
            ) from exc

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        result_type: Any = None,
    ) -> Any:
        return await self.request("GET", path, params=params, result_type=result_type)

    async def post(self, path: str, body: Any, *, result_type: Any = None) -> Any:
        return await self.request("POST", path, body=body, result_type=result_type)


class BaseAPIClient(ABC):
    """Construcción y ciclo de vida comunes a ambos clientes.

    Precedencia de configuración: argumentos explícitos > `settings` >
    variables de entorno `GATSBIE_*`. Si se inyecta `http_client`, el
    cliente no lo cierra ni modifica su configuración: un `timeout`
    explícito se aplica a cada request de este cliente.
    """

    _prefix = "gatsbie"

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str,
        http_client: httpx.AsyncClient | None,
        timeout: float | None,
        settings: GatsbieSettings,
    ) -> None:
        key = api_key if api_key is not None else settings.api_key
        if not key:
            raise ValueError("api_key is required (pass it or set GATSBIE_API_KEY)")

        self._owns_client = http_client is None
        if http_client is None:
            http_client = build_async_client(
                timeout=timeout if timeout is not None else settings.timeout_seconds,
            )

        self._transport = JSONTransport(
            base_url=base_url,
            api_key=key,
            http_client=http_client,
            error_parser=self._parse_error,
            prefix=self._prefix,
            timeout=None if self._owns_client else timeout,
        )

    @staticmethod
    @abstractmethod
    def _parse_error(status: int, body: bytes) -> APIError:
        """Envelope de error del servicio -> excepción tipada."""

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    async def aclose(self) -> None:
        """Cierra el cliente HTTP solo si lo creó este objeto."""

        if self._owns_client:
            await self._transport.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
