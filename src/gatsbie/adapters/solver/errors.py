"""Errores del servicio de resolución de challenges.

Envelope de error:

    {"success": false, "taskId": "...", "error": {"code": "...", "message": "...",
     "details": "...", "timestamp": 1700000000}}
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from gatsbie.core.errors import APIError, UnexpectedResponseError

logger = logging.getLogger(__name__)

ERR_AUTH_FAILED = "AUTH_FAILED"
ERR_INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
ERR_INVALID_REQUEST = "INVALID_REQUEST"
ERR_UPSTREAM_ERROR = "UPSTREAM_ERROR"
ERR_SOLVE_FAILED = "SOLVE_FAILED"
ERR_INTERNAL_ERROR = "INTERNAL_ERROR"


class _ErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str = ""
    message: str = ""
    details: str | None = None
    timestamp: int = 0


class _ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    success: bool = False
    task_id: str | None = Field(default=None, alias="taskId")
    error: _ErrorBody | None = None


class SolverAPIError(APIError):
    """Error devuelto por la API de resolución (o validación local)."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: str | None = None,
        http_status: int = 0,
        timestamp: int = 0,
        task_id: str | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details, http_status=http_status)
        self.timestamp = timestamp
        self.task_id = task_id or None

    @classmethod
    def invalid_request(cls, message: str) -> SolverAPIError:
        """Error de validación local: se lanza antes de tocar la red."""

        return cls(message, code=ERR_INVALID_REQUEST, http_status=400)

    def is_auth_error(self) -> bool:
        return self.matches(ERR_AUTH_FAILED, 401)

    def is_insufficient_credits(self) -> bool:
        return self.matches(ERR_INSUFFICIENT_CREDITS, 402)

    def is_invalid_request(self) -> bool:
        return self.matches(ERR_INVALID_REQUEST, 400)

    def is_upstream_error(self) -> bool:
        return self.matches(ERR_UPSTREAM_ERROR, 502)

    def is_solve_failed(self) -> bool:
        return self.matches(ERR_SOLVE_FAILED, 422)

    def is_internal_error(self) -> bool:
        return self.matches(ERR_INTERNAL_ERROR, 500)


class UnexpectedSolverResponseError(SolverAPIError, UnexpectedResponseError):
    """Respuesta de error sin envelope reconocible; clasifica por status."""


def parse_error_response(status: int, body: bytes) -> SolverAPIError:
    """Convierte una respuesta >= 400 en el error tipado correspondiente."""

    try:
        envelope = _ErrorEnvelope.model_validate_json(body)
    except ValidationError:
        envelope = None

    if envelope is None or envelope.error is None:
        logger.warning("gatsbie: unparseable error response (status %s)", status)
        return UnexpectedSolverResponseError.from_body(status, body.decode("utf-8", errors="replace"))

    err = envelope.error
    return SolverAPIError(
        err.message or f"request failed with status {status}",
        code=err.code,
        details=err.details,
        http_status=status,
        timestamp=err.timestamp,
        task_id=envelope.task_id,
    )
