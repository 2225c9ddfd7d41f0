"""Configuración del SDK.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) para ambos clientes.
- La CLI y los clientes leen la misma fuente; los argumentos explícitos del
  constructor siempre ganan sobre lo que venga del entorno.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api2.gatsbie.io"
DEFAULT_TARGET_BASE_URL = "https://target.gatsbie.io"
DEFAULT_TIMEOUT_SECONDS = 120.0


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gatsbie"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gatsbie"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gatsbie"
    return Path.home() / ".config" / "gatsbie"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran; las existentes se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# Gatsbie SDK user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class GatsbieSettings(BaseSettings):
    """Configuración central del SDK.

    Orden de carga: variables de entorno `GATSBIE_*`, `.env` del proyecto y
    luego el `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="GATSBIE_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key de Gatsbie (formato esperado `gats_*`, no se valida).",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL del servicio de resolución de challenges.",
    )
    target_base_url: str = Field(
        default=DEFAULT_TARGET_BASE_URL,
        min_length=8,
        description="Base URL del servicio retail (Target).",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout por request (segundos). Los solves pueden tardar.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging usado por la CLI.",
    )
