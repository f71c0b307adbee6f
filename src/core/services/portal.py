"""Fachada de las doce operaciones de solo lectura.

Este módulo traduce la forma "herramienta" (app_id, limit, offset, query) a
las opciones de cada servicio. La capa MCP solo habla con esta fachada (vía
el Protocol `VendorAPI`), nunca con httpx.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.domain.models import Application, Channel, Customer, Release
from core.domain.pagination import Page, PageOptions, window
from core.logging_config import get_logger

if TYPE_CHECKING:
    from adapters.vendor_portal.client import VendorPortalClient

logger = get_logger("portal")


class PortalService:
    """Implementa `core.interfaces.vendor_api.VendorAPI` sobre `VendorPortalClient`."""

    def __init__(self, client: VendorPortalClient) -> None:
        self._client = client

    # Applications

    async def list_applications(self, limit: int, offset: int) -> Page[Application]:
        # El endpoint pagina por page/page_size; offset/limit se aplican aquí.
        page = await self._client.applications.list()
        data = window(page.data, limit=limit, offset=offset)
        logger.debug("list_applications window offset=%d limit=%d -> %d", offset, limit, len(data))
        return page.model_copy(update={"data": data})

    async def get_application(self, app_id: str) -> Application:
        return await self._client.applications.get(app_id)

    async def search_applications(self, query: str, limit: int) -> Page[Application]:
        page = await self._client.applications.search(query)
        if limit > 0 and len(page.data) > limit:
            return page.model_copy(update={"data": page.data[:limit]})
        return page

    # Releases

    async def list_releases(self, app_id: str, limit: int, offset: int) -> Page[Release]:
        return await self._client.releases.list(app_id, PageOptions(limit=limit, offset=offset))

    async def get_release(self, app_id: str, release_id: str) -> Release:
        return await self._client.releases.get(app_id, release_id)

    async def search_releases(self, app_id: str, query: str, limit: int) -> Page[Release]:
        return await self._client.releases.search(app_id, query, PageOptions(limit=limit))

    # Channels

    async def list_channels(self, app_id: str, limit: int, offset: int) -> Page[Channel]:
        return await self._client.channels.list(app_id, PageOptions(limit=limit, offset=offset))

    async def get_channel(self, app_id: str, channel_id: str) -> Channel:
        return await self._client.channels.get(app_id, channel_id)

    async def search_channels(self, app_id: str, query: str, limit: int) -> Page[Channel]:
        return await self._client.channels.search(app_id, query, PageOptions(limit=limit))

    # Customers

    async def list_customers(self, app_id: str, limit: int, offset: int) -> Page[Customer]:
        return await self._client.customers.list(app_id, PageOptions(limit=limit, offset=offset))

    async def get_customer(self, app_id: str, customer_id: str) -> Customer:
        return await self._client.customers.get(app_id, customer_id)

    async def search_customers(self, app_id: str, query: str, limit: int) -> Page[Customer]:
        return await self._client.customers.search(app_id, query, PageOptions(limit=limit))
