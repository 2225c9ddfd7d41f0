"""Jerarquía de errores del SDK.

Cuatro familias, todas bajo `GatsbieError`:
- transporte (DNS, conexión, timeout de httpx)
- serialización del request
- decodificación de una respuesta exitosa
- error de aplicación (envelope de error del servicio o validación local)

Los predicados de clasificación nunca lanzan: solo miran `code` y
`http_status` ya capturados. Si el servicio envía `code`, manda el `code`;
si no, decide el status HTTP.
"""

from __future__ import annotations

from pydantic import ValidationError

ERR_RATE_LIMITED = "RATE_LIMITED"


class GatsbieError(Exception):
    """Base de todo lo que lanza el SDK."""


class TransportError(GatsbieError):
    """El request no pudo completarse (red, DNS, conexión)."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class RequestTimeoutError(TransportError):
    """El timeout del cliente HTTP expiró antes de recibir respuesta."""


class SerializationError(GatsbieError):
    """No se pudo serializar el body del request a JSON."""


class DecodeError(GatsbieError):
    """Respuesta 2xx cuyo body no coincide con el tipo esperado."""

    def __init__(self, message: str, *, http_status: int, body: str) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.body = body


class APIError(GatsbieError):
    """Error de aplicación: envelope de error remoto o validación local.

    Las validaciones locales usan esta misma forma con un status sintético
    400, así el caller inspecciona un único tipo.
    """

    prefix = "gatsbie"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: str | None = None,
        http_status: int = 0,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or None
        self.details = details or None
        self.http_status = http_status

    def __str__(self) -> str:
        text = f"{self.prefix}: "
        if self.code:
            text += f"{self.code}: "
        text += self.message
        if self.details:
            text += f" ({self.details})"
        return text

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, message={self.message!r}, "
            f"http_status={self.http_status})"
        )

    def matches(self, code: str, status: int | None = None) -> bool:
        """True si el error pertenece a la categoría (`code`, `status`)."""

        if self.code:
            return self.code == code
        return status is not None and self.http_status == status

    def is_rate_limited(self) -> bool:
        return self.matches(ERR_RATE_LIMITED, 429)


class UnexpectedResponseError(APIError):
    """Respuesta de error cuyo body no es un envelope reconocible.

    Conserva el status y el body crudo para no perder información. Cada
    servicio lo combina con su propio error (`UnexpectedSolverResponseError`,
    `UnexpectedTargetResponseError`) para que los predicados por status
    sigan funcionando.
    """

    body: str = ""

    @classmethod
    def from_body(cls, http_status: int, body: str):
        err = cls(f"unexpected error response (status {http_status}): {body}", http_status=http_status)
        err.body = body
        return err


def describe_validation_error(exc: ValidationError) -> str:
    """Primer error de pydantic como `campo: mensaje`."""

    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {first['msg']}" if field else first["msg"]
