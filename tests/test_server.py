"""FastMCP wiring, exercised in memory through `fastmcp.Client`."""

import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from fake_api import FakeVendorAPI
from server.app import build_server
from server.handlers import TOOLS


@pytest.fixture
def api():
    return FakeVendorAPI()


@pytest.fixture
def mcp(api):
    return build_server(api)


@pytest.mark.asyncio
async def test_lists_all_tools(mcp):
    async with Client(mcp) as client:
        tools = await client.list_tools()
    assert {tool.name for tool in tools} == set(TOOLS)


@pytest.mark.asyncio
async def test_tool_schema_documents_bounds(mcp):
    async with Client(mcp) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}
    schema = tools["list_releases"].inputSchema
    assert schema["required"] == ["app_id"]
    assert schema["properties"]["limit"]["maximum"] == 100
    assert tools["search_customers"].inputSchema["properties"]["limit"]["maximum"] == 50


@pytest.mark.asyncio
async def test_call_tool_returns_json_text(mcp, api):
    async with Client(mcp) as client:
        result = await client.call_tool("list_releases", {"app_id": "app-1", "limit": 5})

    data = json.loads(result.content[0].text)
    assert data["data"][0]["application_id"] == "app-1"
    assert api.calls == [("list_releases", ("app-1", 5, 0))]


@pytest.mark.asyncio
async def test_errors_become_tool_errors(mcp):
    async with Client(mcp) as client:
        with pytest.raises(ToolError, match="application ID is required"):
            await client.call_tool("get_application", {"app_id": ""})
        with pytest.raises(ToolError, match=r"API error \(status 404\)"):
            await client.call_tool("get_application", {"app_id": "missing"})


@pytest.mark.asyncio
async def test_resource_templates_are_registered(mcp):
    async with Client(mcp) as client:
        templates = await client.list_resource_templates()
    assert {t.uriTemplate for t in templates} == {
        "replicated://applications/{app_id}",
        "replicated://applications/{app_id}/releases/{release_id}",
        "replicated://applications/{app_id}/channels/{channel_id}",
        "replicated://applications/{app_id}/customers/{customer_id}",
    }
    assert {t.mimeType for t in templates} == {"application/json"}


@pytest.mark.asyncio
async def test_read_resource(mcp, api):
    async with Client(mcp) as client:
        contents = await client.read_resource("replicated://applications/app-1/customers/cust-9")

    data = json.loads(contents[0].text)
    assert data["id"] == "cust-9"
    assert api.calls == [("get_customer", ("app-1", "cust-9"))]


@pytest.mark.asyncio
async def test_encoded_resource_ids_are_decoded_once(mcp, api):
    async with Client(mcp) as client:
        await client.read_resource("replicated://applications/a%252Fb")
        await client.read_resource("replicated://applications/my%20app/releases/r%2F1")

    assert api.calls == [
        ("get_application", ("a%2Fb",)),
        ("get_release", ("my app", "r/1")),
    ]
