"""Cliente del servicio retail (Target).

Valida localmente los campos que el servidor exige (tcin, cantidad,
credenciales, tienda según el modo de entrega) y falla con un
`TargetAPIError` 400 antes de cualquier request.
"""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from gatsbie.adapters.http_client import BaseAPIClient
from gatsbie.adapters.retail.errors import TargetAPIError, parse_error_response
from gatsbie.core.config import GatsbieSettings
from gatsbie.core.domain.retail import (
    AddToCartRequest,
    AddToCartResponse,
    GetProductRequest,
    NearbyStoresRequest,
    PingResponse,
    Product,
    Store,
)
from gatsbie.core.domain.solver import HealthResponse
from gatsbie.core.errors import describe_validation_error

RequestT = TypeVar("RequestT", bound=BaseModel)


def _build_request(request_type: type[RequestT], fields: dict[str, Any]) -> RequestT:
    try:
        return request_type(**fields)
    except ValidationError as exc:
        raise TargetAPIError.invalid_request(describe_validation_error(exc)) from exc


def _format_number(value: float) -> str:
    # Sin ceros de relleno: 40.7147 -> "40.7147", 50.0 -> "50"
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def build_cart_payload(request: AddToCartRequest) -> dict[str, Any]:
    """Body de `POST /api/v1/cart/items`; los opcionales vacíos no se envían."""

    payload: dict[str, Any] = {
        "tcin": request.tcin,
        "quantity": request.quantity,
        "access_token": request.access_token,
        "proxy": request.proxy,
    }
    if request.fulfillment_type is not None:
        payload["fulfillment_type"] = request.fulfillment_type.value
    if request.store_id:
        payload["store_id"] = request.store_id
    return payload


def validate_cart_request(request: AddToCartRequest) -> None:
    if not request.tcin:
        raise TargetAPIError.invalid_request("tcin is required")
    if request.quantity < 1:
        raise TargetAPIError.invalid_request("quantity must be at least 1")
    if not request.access_token:
        raise TargetAPIError.invalid_request("access_token is required")
    if not request.proxy:
        raise TargetAPIError.invalid_request("proxy is required")
    fulfillment = request.fulfillment_type
    if fulfillment is not None and fulfillment.requires_store() and not request.store_id:
        raise TargetAPIError.invalid_request(
            "store_id is required when fulfillment_type is CURBSIDE or STORE_PICKUP"
        )


class TargetClient(BaseAPIClient):
    """Fachada del servicio retail: health, ping, tiendas, productos y carrito."""

    _prefix = "target"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        settings: GatsbieSettings | None = None,
    ) -> None:
        settings = settings or GatsbieSettings()
        super().__init__(
            api_key,
            base_url=base_url or settings.target_base_url,
            http_client=http_client,
            timeout=timeout,
            settings=settings,
        )

    @staticmethod
    def _parse_error(status: int, body: bytes) -> TargetAPIError:
        return parse_error_response(status, body)

    async def health(self) -> HealthResponse:
        return await self._transport.get("/health", result_type=HealthResponse)

    async def ping(self) -> PingResponse:
        """Conectividad + información de cupo de la API key."""

        return await self._transport.get("/api/v1/ping", result_type=PingResponse)

    async def get_nearby_stores(
        self, request: NearbyStoresRequest | None = None, **fields: Any
    ) -> list[Store]:
        """Tiendas cercanas a (lat, lng). `limit`/`radius` solo se envían si son > 0."""

        if request is None:
            request = _build_request(NearbyStoresRequest, fields)
        params = {
            "lat": _format_number(request.lat),
            "lng": _format_number(request.lng),
        }
        if request.limit > 0:
            params["limit"] = str(request.limit)
        if request.radius > 0:
            params["radius"] = _format_number(request.radius)

        return await self._transport.get(
            "/api/v1/stores/nearby", params=params, result_type=list[Store]
        )

    async def get_product(self, request: GetProductRequest | None = None, **fields: Any) -> Product:
        """Detalle de producto por TCIN (requiere proxy)."""

        if request is None:
            request = _build_request(GetProductRequest, fields)
        if not request.tcin:
            raise TargetAPIError.invalid_request("tcin is required")
        if not request.proxy:
            raise TargetAPIError.invalid_request("proxy is required")

        params = {"proxy": request.proxy}
        if request.store_id:
            params["store_id"] = request.store_id

        path = f"/api/v1/products/{quote(request.tcin, safe='')}"
        return await self._transport.get(path, params=params, result_type=Product)

    async def add_to_cart(
        self, request: AddToCartRequest | None = None, **fields: Any
    ) -> AddToCartResponse:
        """Agrega un item al carrito de Target."""

        if request is None:
            request = _build_request(AddToCartRequest, fields)
        validate_cart_request(request)
        return await self._transport.post(
            "/api/v1/cart/items", build_cart_payload(request), result_type=AddToCartResponse
        )
