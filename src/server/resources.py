"""Recursos MCP: direccionamiento de entidades por URI.

Plantillas (todas `application/json`):
- replicated://applications/{app_id}
- replicated://applications/{app_id}/releases/{release_id}
- replicated://applications/{app_id}/channels/{channel_id}
- replicated://applications/{app_id}/customers/{customer_id}

Cada plantilla resuelve a la misma operación `get_*` que la herramienta equivalente.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from urllib.parse import quote, unquote

from pydantic import BaseModel

from adapters.json_exporter import export_json_text
from core.errors import ArgumentError
from core.interfaces.vendor_api import VendorAPI
from core.logging_config import get_logger

logger = get_logger("resources")

RESOURCE_MIME_TYPE = "application/json"


@dataclass(frozen=True)
class ResourceTemplate:
    uri_template: str
    name: str
    description: str
    pattern: re.Pattern[str]
    resolve: Callable[..., Awaitable[BaseModel]]

    def expand(self, **params: str) -> str:
        """Parámetros ya decodificados -> URI; cada valor se vuelve a escapar."""

        return self.uri_template.format(**{key: quote(value, safe="") for key, value in params.items()})


def _compile(template: str) -> re.Pattern[str]:
    # `{param}` -> grupo con nombre; un segmento no puede contener '/'.
    regex = re.sub(r"\\\{(\w+)\\\}", r"(?P<\1>[^/]+)", re.escape(template))
    return re.compile(f"^{regex}$")


RESOURCE_TEMPLATES: tuple[ResourceTemplate, ...] = (
    ResourceTemplate(
        "replicated://applications/{app_id}",
        "Application Data",
        "Access to detailed application information from the Replicated Vendor Portal",
        _compile("replicated://applications/{app_id}"),
        lambda api, app_id: api.get_application(app_id),
    ),
    ResourceTemplate(
        "replicated://applications/{app_id}/releases/{release_id}",
        "Release Data",
        "Access to detailed release information (version, status, notes) from the Replicated Vendor Portal",
        _compile("replicated://applications/{app_id}/releases/{release_id}"),
        lambda api, app_id, release_id: api.get_release(app_id, release_id),
    ),
    ResourceTemplate(
        "replicated://applications/{app_id}/channels/{channel_id}",
        "Channel Data",
        "Access to detailed channel information (release assignment, archive state) from the Replicated Vendor Portal",
        _compile("replicated://applications/{app_id}/channels/{channel_id}"),
        lambda api, app_id, channel_id: api.get_channel(app_id, channel_id),
    ),
    ResourceTemplate(
        "replicated://applications/{app_id}/customers/{customer_id}",
        "Customer Data",
        "Access to detailed customer information (license, channel, entitlements) from the Replicated Vendor Portal",
        _compile("replicated://applications/{app_id}/customers/{customer_id}"),
        lambda api, app_id, customer_id: api.get_customer(app_id, customer_id),
    ),
)


class ResourceHandlers:
    def __init__(self, api: VendorAPI) -> None:
        self._api = api

    async def read(self, uri: str) -> str:
        """URI -> texto JSON de la entidad. URI desconocida -> `ArgumentError`."""

        for template in RESOURCE_TEMPLATES:
            match = template.pattern.match(uri)
            if match is None:
                continue
            params = {key: unquote(value) for key, value in match.groupdict().items()}
            logger.info("%s resource accessed: %s", template.name, uri)
            entity = await template.resolve(self._api, **params)
            return export_json_text(entity)

        raise ArgumentError(f"unknown resource URI '{uri}'")
