"""Servidor MCP (FastMCP).

Registra las 12 herramientas y las 4 plantillas de recursos sobre una
implementación de `VendorAPI`. Las firmas tipadas solo documentan el esquema
para el agente; la validación real la hacen `ToolHandlers` / `ResourceHandlers`.

Los parámetros que FastMCP ya decodificó se reescapan al reconstruir la URI.
Cualquier `VendorPortalError` se convierte en `ToolError` / `ResourceError`
con el mismo texto. La cancelación no se envuelve.
"""

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from core.errors import VendorPortalError
from core.interfaces.vendor_api import VendorAPI
from core.logging_config import get_logger
from server.arguments import DEFAULT_LIMIT, MAX_LIST_LIMIT, MAX_SEARCH_LIMIT
from server.handlers import TOOLS, ToolHandlers
from server.resources import RESOURCE_MIME_TYPE, RESOURCE_TEMPLATES, ResourceHandlers

SERVER_NAME = "replicated-mcp-server"

logger = get_logger("server")

AppId = Annotated[str, Field(description="The unique identifier of the application")]
Query = Annotated[str, Field(description="Search query string (case-insensitive substring match)")]
ListLimit = Annotated[int, Field(ge=1, le=MAX_LIST_LIMIT, description="Maximum number of items to return (1-100)")]
SearchLimit = Annotated[
    int, Field(ge=1, le=MAX_SEARCH_LIMIT, description="Maximum number of results to return (1-50)")
]
Offset = Annotated[int, Field(ge=0, description="Number of items to skip for pagination")]


def build_server(api: VendorAPI, *, name: str = SERVER_NAME) -> FastMCP:
    """Crea el servidor FastMCP con herramientas y recursos registrados."""

    mcp = FastMCP(name)
    tools = ToolHandlers(api)
    resources = ResourceHandlers(api)

    async def call(tool: str, arguments: dict[str, Any]) -> str:
        try:
            return await tools.call(tool, arguments)
        except VendorPortalError as exc:
            logger.error("%s failed: %s", tool, exc)
            raise ToolError(str(exc)) from exc

    async def read(uri: str) -> str:
        try:
            return await resources.read(uri)
        except VendorPortalError as exc:
            logger.error("resource %s failed: %s", uri, exc)
            raise ResourceError(str(exc)) from exc

    def describe(tool: str) -> str:
        return TOOLS[tool].description

    # Applications

    @mcp.tool(name="list_applications", description=describe("list_applications"))
    async def list_applications(limit: ListLimit = DEFAULT_LIMIT, offset: Offset = 0) -> str:
        return await call("list_applications", {"limit": limit, "offset": offset})

    @mcp.tool(name="get_application", description=describe("get_application"))
    async def get_application(app_id: AppId) -> str:
        return await call("get_application", {"app_id": app_id})

    @mcp.tool(name="search_applications", description=describe("search_applications"))
    async def search_applications(query: Query, limit: SearchLimit = DEFAULT_LIMIT) -> str:
        return await call("search_applications", {"query": query, "limit": limit})

    # Releases

    @mcp.tool(name="list_releases", description=describe("list_releases"))
    async def list_releases(app_id: AppId, limit: ListLimit = DEFAULT_LIMIT, offset: Offset = 0) -> str:
        return await call("list_releases", {"app_id": app_id, "limit": limit, "offset": offset})

    @mcp.tool(name="get_release", description=describe("get_release"))
    async def get_release(
        app_id: AppId,
        release_id: Annotated[str, Field(description="The unique identifier of the release")],
    ) -> str:
        return await call("get_release", {"app_id": app_id, "release_id": release_id})

    @mcp.tool(name="search_releases", description=describe("search_releases"))
    async def search_releases(app_id: AppId, query: Query, limit: SearchLimit = DEFAULT_LIMIT) -> str:
        return await call("search_releases", {"app_id": app_id, "query": query, "limit": limit})

    # Channels

    @mcp.tool(name="list_channels", description=describe("list_channels"))
    async def list_channels(app_id: AppId, limit: ListLimit = DEFAULT_LIMIT, offset: Offset = 0) -> str:
        return await call("list_channels", {"app_id": app_id, "limit": limit, "offset": offset})

    @mcp.tool(name="get_channel", description=describe("get_channel"))
    async def get_channel(
        app_id: AppId,
        channel_id: Annotated[str, Field(description="The unique identifier of the channel")],
    ) -> str:
        return await call("get_channel", {"app_id": app_id, "channel_id": channel_id})

    @mcp.tool(name="search_channels", description=describe("search_channels"))
    async def search_channels(app_id: AppId, query: Query, limit: SearchLimit = DEFAULT_LIMIT) -> str:
        return await call("search_channels", {"app_id": app_id, "query": query, "limit": limit})

    # Customers

    @mcp.tool(name="list_customers", description=describe("list_customers"))
    async def list_customers(app_id: AppId, limit: ListLimit = DEFAULT_LIMIT, offset: Offset = 0) -> str:
        return await call("list_customers", {"app_id": app_id, "limit": limit, "offset": offset})

    @mcp.tool(name="get_customer", description=describe("get_customer"))
    async def get_customer(
        app_id: AppId,
        customer_id: Annotated[str, Field(description="The unique identifier of the customer")],
    ) -> str:
        return await call("get_customer", {"app_id": app_id, "customer_id": customer_id})

    @mcp.tool(name="search_customers", description=describe("search_customers"))
    async def search_customers(app_id: AppId, query: Query, limit: SearchLimit = DEFAULT_LIMIT) -> str:
        return await call("search_customers", {"app_id": app_id, "query": query, "limit": limit})

    # Resources

    app_tpl, release_tpl, channel_tpl, customer_tpl = RESOURCE_TEMPLATES

    @mcp.resource(
        app_tpl.uri_template, name=app_tpl.name, description=app_tpl.description, mime_type=RESOURCE_MIME_TYPE
    )
    async def application_resource(app_id: str) -> str:
        return await read(app_tpl.expand(app_id=app_id))

    @mcp.resource(
        release_tpl.uri_template,
        name=release_tpl.name,
        description=release_tpl.description,
        mime_type=RESOURCE_MIME_TYPE,
    )
    async def release_resource(app_id: str, release_id: str) -> str:
        return await read(release_tpl.expand(app_id=app_id, release_id=release_id))

    @mcp.resource(
        channel_tpl.uri_template,
        name=channel_tpl.name,
        description=channel_tpl.description,
        mime_type=RESOURCE_MIME_TYPE,
    )
    async def channel_resource(app_id: str, channel_id: str) -> str:
        return await read(channel_tpl.expand(app_id=app_id, channel_id=channel_id))

    @mcp.resource(
        customer_tpl.uri_template,
        name=customer_tpl.name,
        description=customer_tpl.description,
        mime_type=RESOURCE_MIME_TYPE,
    )
    async def customer_resource(app_id: str, customer_id: str) -> str:
        return await read(customer_tpl.expand(app_id=app_id, customer_id=customer_id))

    logger.debug("Registered %d tools and %d resource templates", len(TOOLS), len(RESOURCE_TEMPLATES))
    return mcp
