"""Aplicaciones (`/v1/applications`).

A diferencia del resto, aquí la búsqueda es real (server-side, `?q=`) y la
paginación usa `page` / `page_size`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from adapters.vendor_portal.base import escape_segment, logger, require_id
from adapters.vendor_portal.decoding import decode_entity, decode_page
from core.domain.models import Application
from core.domain.pagination import Page, PageOptions
from core.errors import ArgumentError

if TYPE_CHECKING:
    from adapters.vendor_portal.client import VendorPortalClient


class ApplicationService:
    def __init__(self, client: VendorPortalClient) -> None:
        self._client = client

    async def list(self, options: PageOptions | None = None) -> Page[Application]:
        options = options or PageOptions()
        payload = await self._client.get_json(
            "/v1/applications",
            operation="list applications",
            params=options.to_params(),
        )
        page = decode_page(payload, key="applications", model=Application, operation="list applications")
        for app in page.data:
            self._client.check_entity(app)

        logger.info("Listed %d applications", len(page.data))
        return page

    async def get(self, app_id: str) -> Application:
        require_id(app_id, "application ID is required")

        payload = await self._client.get_json(
            f"/v1/applications/{escape_segment(app_id)}",
            operation="get application",
        )
        app = decode_entity(payload, key="application", model=Application, operation="get application")

        logger.info("Fetched application %s", app_id)
        return self._client.check_entity(app)

    async def search(self, query: str, options: PageOptions | None = None) -> Page[Application]:
        if not (query or "").strip():
            raise ArgumentError("search query is required")
        options = options or PageOptions()

        params: dict[str, str | int] = {"q": query.strip()}
        params.update(options.to_params())
        payload = await self._client.get_json(
            "/v1/applications/search",
            operation="search applications",
            params=params,
        )
        page = decode_page(payload, key="applications", model=Application, operation="search applications")
        for app in page.data:
            self._client.check_entity(app)

        logger.info("Search %r matched %d applications", query.strip(), len(page.data))
        return page
