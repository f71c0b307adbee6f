"""Serialización JSON de resultados.

Por qué JSON:
- Es el único bloque de contenido que devuelven las herramientas y recursos MCP.
- Formato estable (claves ordenadas, UTF-8 sin escapar) para que los agentes
  y los tests comparen sin sorpresas.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def to_json_payload(value: Any) -> Any:
    """Modelo Pydantic (o lista de modelos) -> estructura JSON-compatible."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [to_json_payload(item) for item in value]
    return value


def export_json_text(value: Any) -> str:
    return json.dumps(to_json_payload(value), ensure_ascii=False, sort_keys=True)
