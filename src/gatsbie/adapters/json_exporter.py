"""Exportación JSON de respuestas.

Usado por la CLI (`--output`) para persistir un envelope o un recurso tal
como lo devolvió el servidor (aliases incluidos: `taskId`, `ua`, ...).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter


def to_jsonable(value: Any) -> Any:
    """Convierte modelos (o listas de modelos) a tipos JSON con sus aliases."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return TypeAdapter(Any).dump_python(value, mode="json", by_alias=True)


def export_response_json(*, response: Any, output_path: Path) -> Path:
    """Exporta la respuesta a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = to_jsonable(response)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
