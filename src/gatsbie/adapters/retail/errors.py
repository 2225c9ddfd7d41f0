"""Errores del servicio retail (Target).

Envelope de error (plano, a diferencia del solver):

    {"error": "mensaje", "status": 424, "details": "...", "suggestion": "...",
     "code": "INVENTORY_UNAVAILABLE"}

El servicio no siempre manda `code`; en ese caso clasifica el status HTTP.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from gatsbie.core.errors import APIError, UnexpectedResponseError

logger = logging.getLogger(__name__)

ERR_UNAUTHORIZED = "UNAUTHORIZED"
ERR_INVALID_REQUEST = "INVALID_REQUEST"
ERR_NOT_FOUND = "NOT_FOUND"
ERR_UPSTREAM_ERROR = "UPSTREAM_ERROR"
ERR_INTERNAL_ERROR = "INTERNAL_ERROR"
ERR_INVENTORY_UNAVAILABLE = "INVENTORY_UNAVAILABLE"


class _ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: str
    status: int | None = None
    details: str | None = None
    suggestion: str | None = None
    code: str | None = None


class TargetAPIError(APIError):
    """Error devuelto por la API retail (o validación local con status 400)."""

    prefix = "target"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: str | None = None,
        http_status: int = 0,
        status: int | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details, http_status=http_status)
        self.status = status
        self.suggestion = suggestion or None

    @classmethod
    def invalid_request(cls, message: str) -> TargetAPIError:
        """Error de validación local: se lanza antes de tocar la red."""

        return cls(message, code=ERR_INVALID_REQUEST, http_status=400)

    def is_unauthorized(self) -> bool:
        return self.matches(ERR_UNAUTHORIZED, 401)

    def is_not_found(self) -> bool:
        return self.matches(ERR_NOT_FOUND, 404)

    def is_invalid_request(self) -> bool:
        return self.matches(ERR_INVALID_REQUEST, 400)

    def is_upstream_error(self) -> bool:
        return self.matches(ERR_UPSTREAM_ERROR, 502)

    def is_internal_error(self) -> bool:
        return self.matches(ERR_INTERNAL_ERROR, 500)

    def is_inventory_unavailable(self) -> bool:
        """El item no está disponible para el modo de entrega elegido."""

        return self.matches(ERR_INVENTORY_UNAVAILABLE, 424)


class UnexpectedTargetResponseError(TargetAPIError, UnexpectedResponseError):
    """Respuesta de error sin envelope reconocible; clasifica por status."""


def parse_error_response(status: int, body: bytes) -> TargetAPIError:
    """Convierte una respuesta >= 400 en `TargetAPIError`.

    Si el body no es un envelope válido, el error conserva status y body
    crudo y los predicados clasifican por status.
    """

    try:
        envelope = _ErrorEnvelope.model_validate_json(body)
    except ValidationError:
        logger.warning("target: unparseable error response (status %s)", status)
        return UnexpectedTargetResponseError.from_body(status, body.decode("utf-8", errors="replace"))

    return TargetAPIError(
        envelope.error,
        code=envelope.code,
        details=envelope.details,
        http_status=status,
        status=envelope.status,
        suggestion=envelope.suggestion,
    )
