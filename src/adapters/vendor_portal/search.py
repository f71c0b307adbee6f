"""Búsqueda client-side (list-and-filter).

Releases, canales y clientes no tienen endpoint de búsqueda: se descarga una
página grande y se filtra aquí por subcadena, sin distinguir mayúsculas.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from core.domain.pagination import Page
from core.errors import ArgumentError

T = TypeVar("T")


def normalize_query(query: str | None) -> str:
    """Query recortada y en minúsculas; vacía/en blanco -> `ArgumentError`."""

    normalized = (query or "").strip().lower()
    if not normalized:
        raise ArgumentError("search query is required")
    return normalized


def matches(query: str, values: Iterable[str]) -> bool:
    return any(query in (value or "").lower() for value in values)


def filter_page(
    items: Sequence[T],
    query: str,
    fields: Callable[[T], Iterable[str]],
    limit: int,
) -> Page[T]:
    """Filtra, trunca a `limit` (si es positivo) y resume como una única página."""

    found = [item for item in items if matches(query, fields(item))]
    if limit > 0:
        found = found[:limit]
    return Page(
        data=found,
        total_count=len(found),
        page=1,
        page_size=len(found),
        has_more=False,
    )
