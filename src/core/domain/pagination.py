"""Tipos de paginación compartidos por servicios y handlers.

Dos estilos conviven en la API:
- `/v1/applications` pagina por `page` / `page_size`.
- `/v3/app/{app_id}/...` pagina por `limit` / `offset`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

T = TypeVar("T")


@dataclass(frozen=True)
class PageOptions:
    """Opciones de una petición paginada. Solo se envían los valores positivos."""

    page: int = 0
    page_size: int = 0
    limit: int = 0
    offset: int = 0

    def to_params(self) -> dict[str, int]:
        params: dict[str, int] = {}
        for name in ("page", "page_size", "limit", "offset"):
            value = getattr(self, name)
            if value > 0:
                params[name] = value
        return params


class Page(BaseModel, Generic[T]):
    """Una página de entidades más la metadata que devuelva la API.

    Los campos de metadata valen 0/False si la respuesta no los trae.
    """

    model_config = ConfigDict(frozen=True)

    data: list[T] = Field(default_factory=list)
    total_count: int = Field(default=0)
    page: int = Field(default=0)
    page_size: int = Field(default=0)
    has_more: bool = Field(default=False)

    def __len__(self) -> int:
        return len(self.data)


def window(items: Sequence[T], *, limit: int, offset: int) -> list[T]:
    """Ventana [offset, offset+limit) sobre una lista ya descargada.

    `limit <= 0` significa "sin límite"; un offset fuera de rango da lista vacía.
    """

    offset = max(offset, 0)
    if offset >= len(items):
        return []
    if limit <= 0:
        return list(items[offset:])
    return list(items[offset : offset + limit])
