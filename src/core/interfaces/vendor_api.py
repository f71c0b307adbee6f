"""Contrato de acceso al Vendor Portal.

Por qué Protocol:
- Los handlers MCP dependen de esta abstracción, no de httpx.
- En tests se sustituye por un fake en memoria sin levantar transporte.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Application, Channel, Customer, Release
from core.domain.pagination import Page


@runtime_checkable
class VendorAPI(Protocol):
    """Las doce operaciones de solo lectura que expone el servidor.

    Reglas de diseño:
    - Todas son asíncronas (I/O HTTP) y cancelables.
    - IDs vacíos / queries en blanco lanzan `ArgumentError` antes de la red.
    """

    async def list_applications(self, limit: int, offset: int) -> Page[Application]: ...

    async def get_application(self, app_id: str) -> Application: ...

    async def search_applications(self, query: str, limit: int) -> Page[Application]: ...

    async def list_releases(self, app_id: str, limit: int, offset: int) -> Page[Release]: ...

    async def get_release(self, app_id: str, release_id: str) -> Release: ...

    async def search_releases(self, app_id: str, query: str, limit: int) -> Page[Release]: ...

    async def list_channels(self, app_id: str, limit: int, offset: int) -> Page[Channel]: ...

    async def get_channel(self, app_id: str, channel_id: str) -> Channel: ...

    async def search_channels(self, app_id: str, query: str, limit: int) -> Page[Channel]: ...

    async def list_customers(self, app_id: str, limit: int, offset: int) -> Page[Customer]: ...

    async def get_customer(self, app_id: str, customer_id: str) -> Customer: ...

    async def search_customers(self, app_id: str, query: str, limit: int) -> Page[Customer]: ...
