"""Builders de request por operación de solve.

Cada builder es puro: toma el request público y devuelve el dict que espera
el endpoint, con su `task_type` fijo. Los opcionales vacíos (`""`, `False`,
`0`, colecciones vacías) no se envían.

`OPERATIONS` indexa las operaciones por nombre; la fachada y la CLI
despachan a través de este registro.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel

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

Payload = dict[str, Any]


def _put_optional(payload: Payload, key: str, value: Any) -> None:
    if value:
        payload[key] = value


def build_datadome_payload(request: DatadomeRequest) -> Payload:
    return {
        "task_type": "datadome-device-check",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "target_method": request.target_method,
    }


def build_datadome_slider_payload(request: DatadomeSliderRequest) -> Payload:
    return {
        "task_type": "datadome-slider",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "target_method": request.target_method,
    }


def build_recaptcha_v3_payload(request: RecaptchaV3Request) -> Payload:
    payload: Payload = {
        "task_type": "recaptchav3",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "site_key": request.site_key,
    }
    _put_optional(payload, "action", request.action)
    _put_optional(payload, "title", request.title)
    _put_optional(payload, "enterprise", request.enterprise)
    return payload


def build_akamai_payload(request: AkamaiRequest) -> Payload:
    payload: Payload = {
        "task_type": "akamai",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "akamai_js_url": request.akamai_js_url,
    }
    _put_optional(payload, "page_fp", request.page_fp)
    return payload


def build_sbsd_payload(request: SBSDRequest) -> Payload:
    return {
        "task_type": "sbsd",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "target_method": request.target_method,
    }


def build_vercel_payload(request: VercelRequest) -> Payload:
    return {
        "task_type": "vercel",
        "proxy": request.proxy,
        "target_url": request.target_url,
    }


def build_shape_payload(request: ShapeRequest) -> Payload:
    return {
        "task_type": "shape",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "target_api": request.target_api,
        "shape_js_url": request.shape_js_url,
        "title": request.title,
        "method": request.method,
    }


def build_shape_v2_payload(request: ShapeV2Request) -> Payload:
    """Shape v2 no usa `task_type`: manda `url` + un `metadata` anidado.

    Solo se incluyen en `metadata` las claves con valor (no vacías / > 0).
    """

    metadata: Payload = {"proxy": request.proxy}
    _put_optional(metadata, "pkey", request.pkey)
    _put_optional(metadata, "script_url", request.script_url)
    if request.request:
        metadata["request"] = dict(request.request)
    _put_optional(metadata, "country", request.country)
    if request.timeout > 0:
        metadata["timeout"] = request.timeout

    return {
        "url": request.url,
        "metadata": metadata,
    }


def build_turnstile_payload(request: TurnstileRequest) -> Payload:
    return {
        "task_type": "turnstile",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "site_key": request.site_key,
    }


def build_cloudflare_waf_payload(request: CloudflareWAFRequest) -> Payload:
    return {
        "task_type": "cloudflare_waf",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "target_method": request.target_method,
    }


def build_perimeterx_payload(request: PerimeterXRequest) -> Payload:
    return {
        "task_type": "perimeterx_invisible",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "perimeterx_js_url": request.perimeterx_js_url,
        "pxAppId": request.px_app_id,
    }


def build_captchafox_payload(request: CaptchaFoxRequest) -> Payload:
    return {
        "task_type": "captchafox",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "site_key": request.site_key,
    }


def build_castle_payload(request: CastleRequest) -> Payload:
    config = request.config_json
    config_json: Payload = {}
    _put_optional(config_json, "avoidCookies", config.avoid_cookies)
    config_json.update({"pk": config.pk, "wUrl": config.w_url, "swUrl": config.sw_url})
    return {
        "task_type": "castle",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "config_json": config_json,
    }


def build_reese84_payload(request: Reese84Request) -> Payload:
    return {
        "task_type": "reese84",
        "proxy": request.proxy,
        "reese84_js_url": request.reese84_js_url,
    }


def build_forter_payload(request: ForterRequest) -> Payload:
    return {
        "task_type": "forter",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "forter_js_url": request.forter_js_url,
        "site_id": request.site_id,
    }


def build_funcaptcha_payload(request: FuncaptchaRequest) -> Payload:
    return {
        "task_type": "funcaptcha",
        "proxy": request.proxy,
        "target_url": request.target_url,
        "custom_api_host": request.custom_api_host,
        "public_key": request.public_key,
    }


@dataclass(frozen=True)
class SolveOperation:
    """Una operación de solve: ruta, tipos y builder del wire."""

    name: str
    path: str
    task_type: str | None
    request_type: type[BaseModel]
    solution_type: Any
    builder: Callable[[Any], Payload]
    description: str = ""

    @property
    def response_type(self) -> Any:
        return SolveResponse[self.solution_type]

    def build(self, request: BaseModel) -> Payload:
        if not isinstance(request, self.request_type):
            raise TypeError(
                f"{self.name} expects {self.request_type.__name__}, got {type(request).__name__}"
            )
        return self.builder(request)


def _op(
    name: str,
    task_type: str | None,
    request_type: type[BaseModel],
    solution_type: Any,
    builder: Callable[[Any], Payload],
    description: str,
) -> SolveOperation:
    return SolveOperation(
        name=name,
        path=f"/v1/solve/{name}",
        task_type=task_type,
        request_type=request_type,
        solution_type=solution_type,
        builder=builder,
        description=description,
    )


OPERATIONS: dict[str, SolveOperation] = {
    op.name: op
    for op in (
        _op("datadome-device-check", "datadome-device-check", DatadomeRequest, DatadomeSolution,
            build_datadome_payload, "Datadome device check"),
        _op("recaptchav3", "recaptchav3", RecaptchaV3Request, RecaptchaV3Solution,
            build_recaptcha_v3_payload, "reCAPTCHA v3"),
        _op("akamai", "akamai", AkamaiRequest, AkamaiSolution,
            build_akamai_payload, "Akamai bot management"),
        _op("vercel", "vercel", VercelRequest, VercelSolution,
            build_vercel_payload, "Vercel bot protection"),
        _op("shape", "shape", ShapeRequest, ShapeSolution,
            build_shape_payload, "Shape antibot (v1)"),
        _op("shape-v2", None, ShapeV2Request, ShapeV2Solution,
            build_shape_v2_payload, "Shape antibot (v2, TLS fingerprinting)"),
        _op("turnstile", "turnstile", TurnstileRequest, TurnstileSolution,
            build_turnstile_payload, "Cloudflare Turnstile"),
        _op("perimeterx-invisible", "perimeterx_invisible", PerimeterXRequest, PerimeterXSolution,
            build_perimeterx_payload, "PerimeterX Invisible"),
        _op("cloudflare-waf", "cloudflare_waf", CloudflareWAFRequest, CloudflareWAFSolution,
            build_cloudflare_waf_payload, "Cloudflare WAF"),
        _op("datadome-slider", "datadome-slider", DatadomeSliderRequest, DatadomeSliderSolution,
            build_datadome_slider_payload, "Datadome slider CAPTCHA"),
        _op("captchafox", "captchafox", CaptchaFoxRequest, CaptchaFoxSolution,
            build_captchafox_payload, "CaptchaFox"),
        _op("castle", "castle", CastleRequest, CastleSolution,
            build_castle_payload, "Castle"),
        _op("reese84", "reese84", Reese84Request, Reese84Solution,
            build_reese84_payload, "Incapsula Reese84"),
        _op("forter", "forter", ForterRequest, ForterSolution,
            build_forter_payload, "Forter"),
        _op("funcaptcha", "funcaptcha", FuncaptchaRequest, FuncaptchaSolution,
            build_funcaptcha_payload, "Funcaptcha (Arkose Labs)"),
        _op("sbsd", "sbsd", SBSDRequest, SBSDSolution,
            build_sbsd_payload, "Akamai SBSD"),
    )
}


def get_operation(name: str) -> SolveOperation:
    """Busca una operación por nombre (acepta `_` en lugar de `-`)."""

    key = name.strip().lower().replace("_", "-")
    try:
        return OPERATIONS[key]
    except KeyError:
        raise KeyError(f"unknown solve operation: {name!r}") from None
