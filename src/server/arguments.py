"""Modelos de argumentos de las herramientas.

Cada herramienta recibe un mapa sin tipar. Un único paso `parse_arguments`
lo convierte en un modelo Pydantic:
- números que llegan como float sin parte decimal se aceptan como int;
- límites (`limit`, `offset`) se validan aquí, antes de cualquier I/O;
- los errores se traducen a `ArgumentError` con un mensaje legible.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, Field, StrictStr, ValidationError
from pydantic.config import ConfigDict

from core.errors import ArgumentError

DEFAULT_LIMIT = 10
MAX_LIST_LIMIT = 100
MAX_SEARCH_LIMIT = 50

A = TypeVar("A", bound="ToolArguments")


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ListApplicationsArgs(ToolArguments):
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIST_LIMIT)
    offset: int = Field(default=0, ge=0)


class ApplicationArgs(ToolArguments):
    app_id: StrictStr


class SearchApplicationsArgs(ToolArguments):
    query: StrictStr
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_SEARCH_LIMIT)


class ListInAppArgs(ToolArguments):
    app_id: StrictStr
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIST_LIMIT)
    offset: int = Field(default=0, ge=0)


class SearchInAppArgs(ToolArguments):
    app_id: StrictStr
    query: StrictStr
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_SEARCH_LIMIT)


class ReleaseArgs(ToolArguments):
    app_id: StrictStr
    release_id: StrictStr


class ChannelArgs(ToolArguments):
    app_id: StrictStr
    channel_id: StrictStr


class CustomerArgs(ToolArguments):
    app_id: StrictStr
    customer_id: StrictStr


def _has_required_fields(model: type[ToolArguments]) -> bool:
    return any(field.is_required() for field in model.model_fields.values())


def _describe(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else "arguments"
    if error["type"] == "missing" or error["type"].startswith("string"):
        return f"{field} argument is required and must be a string"
    return f"{field} argument is invalid: {error['msg']}"


def parse_arguments(model: type[A], arguments: Mapping[str, Any] | None) -> A:
    """Mapa sin tipar -> modelo de argumentos, o `ArgumentError`."""

    if arguments is None:
        if _has_required_fields(model):
            raise ArgumentError("missing arguments")
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ArgumentError("arguments must be a JSON object")

    try:
        return model.model_validate(dict(arguments))
    except ValidationError as exc:
        raise ArgumentError(_describe(exc)) from exc
