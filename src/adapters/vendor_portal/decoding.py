"""Decodificación de sobres (envelopes) JSON del Vendor Portal.

La API no es uniforme:
- listas bajo el nombre plural (`applications`), bajo `data` o como array pelado;
- objetos sueltos o envueltos (`{"release": {...}}`).

Cualquier forma inesperada se convierte en `DecodeError` con el nombre de la operación.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError

from core.domain.models import VendorEntity
from core.domain.pagination import Page
from core.errors import DecodeError

E = TypeVar("E", bound=VendorEntity)


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def decode_page(payload: Any, *, key: str, model: type[E], operation: str) -> Page[E]:
    if isinstance(payload, list):
        items: Any = payload
        meta: dict[str, Any] = {}
    elif isinstance(payload, dict):
        if key in payload:
            items = payload[key]
        elif "data" in payload:
            items = payload["data"]
        else:
            raise DecodeError(operation, f"response has neither '{key}' nor 'data'")
        # Un array `null` es una página vacía.
        if items is None:
            items = []
        meta = payload
    else:
        raise DecodeError(operation, f"unexpected JSON value of type {type(payload).__name__}")

    if not isinstance(items, list):
        raise DecodeError(operation, f"'{key}' must be a JSON array")

    try:
        entities = [model.model_validate(item) for item in items]
    except ValidationError as exc:
        raise DecodeError(operation, exc) from exc

    return Page[model](  # type: ignore[valid-type]
        data=entities,
        total_count=_as_int(meta.get("total_count")),
        page=_as_int(meta.get("page")),
        page_size=_as_int(meta.get("page_size")),
        has_more=bool(meta.get("has_more", False)),
    )


def decode_entity(payload: Any, *, key: str, model: type[E], operation: str) -> E:
    if not isinstance(payload, dict):
        raise DecodeError(operation, f"expected a JSON object, got {type(payload).__name__}")

    body = payload.get(key)
    if not isinstance(body, dict):
        body = payload

    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise DecodeError(operation, exc) from exc
