"""Cliente del servicio de resolución de challenges (Gatsbie).

Uso:

    async with SolverClient("gats_...") as client:
        resp = await client.solve_turnstile(
            TurnstileRequest(proxy=..., target_url=..., site_key=...)
        )
        print(resp.solution.token)
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from gatsbie.adapters.http_client import BaseAPIClient
from gatsbie.adapters.solver.errors import SolverAPIError, parse_error_response
from gatsbie.adapters.solver.operations import SolveOperation, get_operation
from gatsbie.core.config import GatsbieSettings
from gatsbie.core.domain.solver import (
    AkamaiRequest,
    AkamaiSolution,
    CaptchaFoxRequest,
    CaptchaFoxSolution,
    CastleRequest,
    CastleSolution,
    CloudflareWAFRequest,
    CloudflareWAFSolution,
    DatadomeRequest,
    DatadomeSliderRequest,
    DatadomeSliderSolution,
    DatadomeSolution,
    ForterRequest,
    ForterSolution,
    FuncaptchaRequest,
    FuncaptchaSolution,
    HealthResponse,
    PerimeterXRequest,
    PerimeterXSolution,
    RecaptchaV3Request,
    RecaptchaV3Solution,
    Reese84Request,
    Reese84Solution,
    SBSDRequest,
    SBSDSolution,
    ShapeRequest,
    ShapeSolution,
    ShapeV2Request,
    ShapeV2Solution,
    SolveResponse,
    TurnstileRequest,
    TurnstileSolution,
    VercelRequest,
    VercelSolution,
)
from gatsbie.core.errors import describe_validation_error


class SolverClient(BaseAPIClient):
    """Fachada: una corrutina por endpoint de `/v1/solve/*`."""

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
            base_url=base_url or settings.base_url,
            http_client=http_client,
            timeout=timeout,
            settings=settings,
        )

    @staticmethod
    def _parse_error(status: int, body: bytes) -> SolverAPIError:
        return parse_error_response(status, body)

    async def health(self) -> HealthResponse:
        """Estado del servidor de resolución."""

        return await self._transport.get("/health", result_type=HealthResponse)

    async def solve(self, operation: str | SolveOperation, request: BaseModel) -> SolveResponse[Any]:
        """Despacho genérico por nombre de operación (p.ej. `"turnstile"`)."""

        op = operation if isinstance(operation, SolveOperation) else get_operation(operation)
        payload = op.build(request)
        return await self._transport.post(op.path, payload, result_type=op.response_type)

    async def _solve(
        self,
        name: str,
        request: BaseModel | None,
        request_type: type[BaseModel],
        fields: dict[str, Any],
    ) -> Any:
        if request is None:
            try:
                request = request_type(**fields)
            except ValidationError as exc:
                raise SolverAPIError.invalid_request(describe_validation_error(exc)) from exc
        elif fields:
            raise TypeError("pass either a request model or keyword fields, not both")
        return await self.solve(name, request)

    async def solve_datadome(
        self, request: DatadomeRequest | None = None, **fields: Any
    ) -> SolveResponse[DatadomeSolution]:
        """Datadome device check."""

        return await self._solve("datadome-device-check", request, DatadomeRequest, fields)

    async def solve_recaptcha_v3(
        self, request: RecaptchaV3Request | None = None, **fields: Any
    ) -> SolveResponse[RecaptchaV3Solution]:
        """reCAPTCHA v3 (opcionalmente Enterprise)."""

        return await self._solve("recaptchav3", request, RecaptchaV3Request, fields)

    async def solve_akamai(
        self, request: AkamaiRequest | None = None, **fields: Any
    ) -> SolveResponse[AkamaiSolution]:
        """Akamai bot management (`_abck`, `bm_sz`)."""

        return await self._solve("akamai", request, AkamaiRequest, fields)

    async def solve_vercel(
        self, request: VercelRequest | None = None, **fields: Any
    ) -> SolveResponse[VercelSolution]:
        return await self._solve("vercel", request, VercelRequest, fields)

    async def solve_shape(
        self, request: ShapeRequest | None = None, **fields: Any
    ) -> SolveResponse[ShapeSolution]:
        """Shape v1. La solución es un mapping de headers con nombres dinámicos."""

        return await self._solve("shape", request, ShapeRequest, fields)

    async def solve_shape_v2(
        self, request: ShapeV2Request | None = None, **fields: Any
    ) -> SolveResponse[ShapeV2Solution]:
        """Shape v2 con fingerprint TLS."""

        return await self._solve("shape-v2", request, ShapeV2Request, fields)

    async def solve_turnstile(
        self, request: TurnstileRequest | None = None, **fields: Any
    ) -> SolveResponse[TurnstileSolution]:
        """Cloudflare Turnstile."""

        return await self._solve("turnstile", request, TurnstileRequest, fields)

    async def solve_perimeterx(
        self, request: PerimeterXRequest | None = None, **fields: Any
    ) -> SolveResponse[PerimeterXSolution]:
        """PerimeterX Invisible."""

        return await self._solve("perimeterx-invisible", request, PerimeterXRequest, fields)

    async def solve_cloudflare_waf(
        self, request: CloudflareWAFRequest | None = None, **fields: Any
    ) -> SolveResponse[CloudflareWAFSolution]:
        return await self._solve("cloudflare-waf", request, CloudflareWAFRequest, fields)

    async def solve_datadome_slider(
        self, request: DatadomeSliderRequest | None = None, **fields: Any
    ) -> SolveResponse[DatadomeSliderSolution]:
        return await self._solve("datadome-slider", request, DatadomeSliderRequest, fields)

    async def solve_captchafox(
        self, request: CaptchaFoxRequest | None = None, **fields: Any
    ) -> SolveResponse[CaptchaFoxSolution]:
        return await self._solve("captchafox", request, CaptchaFoxRequest, fields)

    async def solve_castle(
        self, request: CastleRequest | None = None, **fields: Any
    ) -> SolveResponse[CastleSolution]:
        return await self._solve("castle", request, CastleRequest, fields)

    async def solve_reese84(
        self, request: Reese84Request | None = None, **fields: Any
    ) -> SolveResponse[Reese84Solution]:
        """Incapsula Reese84."""

        return await self._solve("reese84", request, Reese84Request, fields)

    async def solve_forter(
        self, request: ForterRequest | None = None, **fields: Any
    ) -> SolveResponse[ForterSolution]:
        return await self._solve("forter", request, ForterRequest, fields)

    async def solve_funcaptcha(
        self, request: FuncaptchaRequest | None = None, **fields: Any
    ) -> SolveResponse[FuncaptchaSolution]:
        """Funcaptcha (Arkose Labs)."""

        return await self._solve("funcaptcha", request, FuncaptchaRequest, fields)

    async def solve_sbsd(
        self, request: SBSDRequest | None = None, **fields: Any
    ) -> SolveResponse[SBSDSolution]:
        """Akamai SBSD."""

        return await self._solve("sbsd", request, SBSDRequest, fields)

