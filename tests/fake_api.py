"""`VendorAPI` en memoria para probar handlers y servidor sin transporte."""

from __future__ import annotations

from core.domain.models import Application, Channel, Customer, Release
from core.domain.pagination import Page
from core.errors import APIError, ArgumentError
from vendor_payloads import application_json, channel_json, customer_json, release_json


class FakeVendorAPI:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, args))

    @staticmethod
    def _require(value: str, message: str) -> None:
        if not value:
            raise ArgumentError(message)

    async def list_applications(self, limit: int, offset: int) -> Page[Application]:
        self._record("list_applications", limit, offset)
        return Page[Application](data=[Application.model_validate(application_json())], total_count=1)

    async def get_application(self, app_id: str) -> Application:
        self._record("get_application", app_id)
        self._require(app_id, "application ID is required")
        if app_id == "missing":
            raise APIError(404, "Not Found")
        return Application.model_validate(application_json(id=app_id))

    async def search_applications(self, query: str, limit: int) -> Page[Application]:
        self._record("search_applications", query, limit)
        return Page[Application](data=[Application.model_validate(application_json())], total_count=1)

    async def list_releases(self, app_id: str, limit: int, offset: int) -> Page[Release]:
        self._record("list_releases", app_id, limit, offset)
        return Page[Release](data=[Release.model_validate(release_json(application_id=app_id))], total_count=1)

    async def get_release(self, app_id: str, release_id: str) -> Release:
        self._record("get_release", app_id, release_id)
        return Release.model_validate(release_json(id=release_id, application_id=app_id))

    async def search_releases(self, app_id: str, query: str, limit: int) -> Page[Release]:
        self._record("search_releases", app_id, query, limit)
        return Page[Release](data=[], page=1)

    async def list_channels(self, app_id: str, limit: int, offset: int) -> Page[Channel]:
        self._record("list_channels", app_id, limit, offset)
        return Page[Channel](data=[Channel.model_validate(channel_json(application_id=app_id))], total_count=1)

    async def get_channel(self, app_id: str, channel_id: str) -> Channel:
        self._record("get_channel", app_id, channel_id)
        return Channel.model_validate(channel_json(id=channel_id, application_id=app_id))

    async def search_channels(self, app_id: str, query: str, limit: int) -> Page[Channel]:
        self._record("search_channels", app_id, query, limit)
        return Page[Channel](data=[], page=1)

    async def list_customers(self, app_id: str, limit: int, offset: int) -> Page[Customer]:
        self._record("list_customers", app_id, limit, offset)
        return Page[Customer](data=[Customer.model_validate(customer_json(application_id=app_id))], total_count=1)

    async def get_customer(self, app_id: str, customer_id: str) -> Customer:
        self._record("get_customer", app_id, customer_id)
        return Customer.model_validate(customer_json(id=customer_id, application_id=app_id))

    async def search_customers(self, app_id: str, query: str, limit: int) -> Page[Customer]:
        self._record("search_customers", app_id, query, limit)
        return Page[Customer](data=[Customer.model_validate(customer_json())], page=1, total_count=1)
