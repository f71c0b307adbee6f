"""Servicio genérico para entidades colgadas de una aplicación (`/v3/app/{app_id}/...`).

Releases, canales y clientes comparten forma:
- list:   GET /v3/app/{app_id}/{plural}?limit&offset
- get:    GET /v3/app/{app_id}/{singular}/{id}   (sobre `{singular: {...}}`)
- search: list-and-filter sobre `search_page_size` elementos.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar
from urllib.parse import quote

from adapters.vendor_portal.decoding import decode_entity, decode_page
from adapters.vendor_portal.search import filter_page, normalize_query
from core.domain.models import VendorEntity
from core.domain.pagination import Page, PageOptions
from core.errors import ArgumentError
from core.logging_config import get_logger

if TYPE_CHECKING:
    from adapters.vendor_portal.client import VendorPortalClient

E = TypeVar("E", bound=VendorEntity)

logger = get_logger("services")


def escape_segment(value: str) -> str:
    """Escapa un segmento de path (incluida `/`)."""

    return quote(value, safe="")


def require_id(value: str | None, message: str) -> str:
    if not value:
        raise ArgumentError(message)
    return value


class AppScopedService(Generic[E]):
    model: ClassVar[type[VendorEntity]]
    plural: ClassVar[str]
    singular: ClassVar[str]

    def __init__(self, client: VendorPortalClient) -> None:
        self._client = client

    def search_fields(self, entity: E) -> Iterable[str]:
        raise NotImplementedError

    def _collection_path(self, app_id: str) -> str:
        return f"/v3/app/{escape_segment(app_id)}/{self.plural}"

    async def list(self, app_id: str, options: PageOptions | None = None) -> Page[E]:
        require_id(app_id, "application ID is required")
        options = options or PageOptions()

        payload = await self._client.get_json(
            self._collection_path(app_id),
            operation=f"list {self.plural}",
            params=options.to_params(),
        )
        page = decode_page(payload, key=self.plural, model=self.model, operation=f"list {self.plural}")
        for entity in page.data:
            self._client.check_entity(entity)

        logger.info("Listed %d %s for app %s", len(page.data), self.plural, app_id)
        return page  # type: ignore[return-value]

    async def get(self, app_id: str, entity_id: str) -> E:
        require_id(app_id, "application ID is required")
        require_id(entity_id, f"{self.singular} ID is required")

        path = f"/v3/app/{escape_segment(app_id)}/{self.singular}/{escape_segment(entity_id)}"
        payload = await self._client.get_json(path, operation=f"get {self.singular}")
        entity = decode_entity(payload, key=self.singular, model=self.model, operation=f"get {self.singular}")

        logger.info("Fetched %s %s for app %s", self.singular, entity_id, app_id)
        return self._client.check_entity(entity)  # type: ignore[return-value]

    async def search(self, app_id: str, query: str, options: PageOptions | None = None) -> Page[E]:
        require_id(app_id, "application ID is required")
        needle = normalize_query(query)
        options = options or PageOptions()

        fetched = await self.list(
            app_id,
            PageOptions(limit=self._client.settings.search_page_size, offset=options.offset),
        )
        result = filter_page(fetched.data, needle, self.search_fields, options.limit)
        logger.debug(
            "search %s is list-and-filter: fetched=%d matched=%d query=%r",
            self.plural,
            len(fetched.data),
            len(result.data),
            needle,
        )
        return result
