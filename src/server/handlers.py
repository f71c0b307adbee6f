"""Handlers de herramientas MCP.

Flujo por llamada: mapa sin tipar -> `parse_arguments` -> operación de
`VendorAPI` -> texto JSON (único bloque de contenido del resultado).

Los handlers no guardan estado mutable: cada llamada es independiente y se
puede ejecutar en paralelo con cualquier otra.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from adapters.json_exporter import export_json_text
from core.errors import ArgumentError
from core.interfaces.vendor_api import VendorAPI
from core.logging_config import get_logger
from server.arguments import (
    ApplicationArgs,
    ChannelArgs,
    CustomerArgs,
    ListApplicationsArgs,
    ListInAppArgs,
    ReleaseArgs,
    SearchApplicationsArgs,
    SearchInAppArgs,
    ToolArguments,
    parse_arguments,
)

logger = get_logger("tools")

Invoker = Callable[[VendorAPI, Any], Awaitable[BaseModel]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    arguments: type[ToolArguments]
    invoke: Invoker


_SEARCH_NOTE = (
    " Search is performed client-side: one page of up to search_page_size items is fetched"
    " and filtered by case-insensitive substring."
)

TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "list_applications",
        "List all applications in the Replicated Vendor Portal. Returns basic information about each "
        "application including ID, name, and status.",
        ListApplicationsArgs,
        lambda api, a: api.list_applications(a.limit, a.offset),
    ),
    ToolSpec(
        "get_application",
        "Get detailed information about a specific application by ID.",
        ApplicationArgs,
        lambda api, a: api.get_application(a.app_id),
    ),
    ToolSpec(
        "search_applications",
        "Search applications by name or other criteria. Returns matching applications.",
        SearchApplicationsArgs,
        lambda api, a: api.search_applications(a.query, a.limit),
    ),
    ToolSpec(
        "list_releases",
        "List releases for a specific application. Returns release information including version and status.",
        ListInAppArgs,
        lambda api, a: api.list_releases(a.app_id, a.limit, a.offset),
    ),
    ToolSpec(
        "get_release",
        "Get detailed information about a specific release by ID.",
        ReleaseArgs,
        lambda api, a: api.get_release(a.app_id, a.release_id),
    ),
    ToolSpec(
        "search_releases",
        "Search releases by version, status or notes within a specific application." + _SEARCH_NOTE,
        SearchInAppArgs,
        lambda api, a: api.search_releases(a.app_id, a.query, a.limit),
    ),
    ToolSpec(
        "list_channels",
        "List channels for a specific application. Returns channel information including name and "
        "release assignments.",
        ListInAppArgs,
        lambda api, a: api.list_channels(a.app_id, a.limit, a.offset),
    ),
    ToolSpec(
        "get_channel",
        "Get detailed information about a specific channel by ID.",
        ChannelArgs,
        lambda api, a: api.get_channel(a.app_id, a.channel_id),
    ),
    ToolSpec(
        "search_channels",
        "Search channels by name, slug or description within a specific application." + _SEARCH_NOTE,
        SearchInAppArgs,
        lambda api, a: api.search_channels(a.app_id, a.query, a.limit),
    ),
    ToolSpec(
        "list_customers",
        "List customers for a specific application. Returns customer information including name, status, "
        "and channel assignments.",
        ListInAppArgs,
        lambda api, a: api.list_customers(a.app_id, a.limit, a.offset),
    ),
    ToolSpec(
        "get_customer",
        "Get detailed information about a specific customer by ID, including license details.",
        CustomerArgs,
        lambda api, a: api.get_customer(a.app_id, a.customer_id),
    ),
    ToolSpec(
        "search_customers",
        "Search customers by name, email, type, status, license or channel within a specific application."
        + _SEARCH_NOTE,
        SearchInAppArgs,
        lambda api, a: api.search_customers(a.app_id, a.query, a.limit),
    ),
)

TOOLS: dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}


class ToolHandlers:
    """Despacha llamadas de herramienta por nombre."""

    def __init__(self, api: VendorAPI) -> None:
        self._api = api

    async def call(self, name: str, arguments: Mapping[str, Any] | None) -> str:
        spec = TOOLS.get(name)
        if spec is None:
            raise ArgumentError(f"unknown tool '{name}'")

        logger.info("%s tool called with arguments=%s", name, arguments)
        request = parse_arguments(spec.arguments, arguments)
        result = await spec.invoke(self._api, request)
        return export_json_text(result)
