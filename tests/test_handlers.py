"""Tool handlers: direct calls against an in-memory VendorAPI (no server needed)."""

import asyncio
import json

import pytest

from core.errors import APIError, ArgumentError
from fake_api import FakeVendorAPI
from server.handlers import TOOL_SPECS, TOOLS, ToolHandlers


@pytest.fixture
def api():
    return FakeVendorAPI()


@pytest.fixture
def handlers(api):
    return ToolHandlers(api)


class TestToolDefinitions:
    def test_twelve_unique_tools(self):
        names = [spec.name for spec in TOOL_SPECS]
        assert len(names) == 12
        assert len(set(names)) == 12
        assert set(TOOLS) == set(names)

    def test_every_tool_has_description(self):
        assert all(spec.description for spec in TOOL_SPECS)

    def test_client_side_search_is_documented(self):
        for name in ("search_releases", "search_channels", "search_customers"):
            assert "client-side" in TOOLS[name].description


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, handlers):
        with pytest.raises(ArgumentError, match="unknown tool 'delete_everything'"):
            await handlers.call("delete_everything", {})

    @pytest.mark.asyncio
    async def test_list_applications_defaults(self, handlers, api):
        text = await handlers.call("list_applications", None)

        assert api.calls == [("list_applications", (10, 0))]
        data = json.loads(text)
        assert data["data"][0]["id"] == "app-123"
        assert data["total_count"] == 1

    @pytest.mark.asyncio
    async def test_result_is_single_json_document(self, handlers):
        text = await handlers.call("get_release", {"app_id": "app-1", "release_id": "rel-7"})
        data = json.loads(text)
        assert data["id"] == "rel-7"
        assert data["application_id"] == "app-1"
        assert data["released_at"] == "2024-01-02T10:00:00Z"

    @pytest.mark.asyncio
    async def test_float_numbers_become_ints(self, handlers, api):
        await handlers.call("list_customers", {"app_id": "app-1", "limit": 25.0, "offset": 5.0})
        assert api.calls == [("list_customers", ("app-1", 25, 5))]

    @pytest.mark.asyncio
    async def test_search_arguments_are_forwarded(self, handlers, api):
        await handlers.call("search_customers", {"app_id": "app-1", "query": "acme", "limit": 3})
        await handlers.call("search_applications", {"query": "web"})
        assert api.calls == [
            ("search_customers", ("app-1", "acme", 3)),
            ("search_applications", ("web", 10)),
        ]

    @pytest.mark.asyncio
    async def test_service_errors_propagate(self, handlers):
        with pytest.raises(APIError, match="status 404"):
            await handlers.call("get_application", {"app_id": "missing"})

    @pytest.mark.asyncio
    async def test_empty_id_reaches_service_check(self, handlers):
        with pytest.raises(ArgumentError, match="application ID is required"):
            await handlers.call("get_application", {"app_id": ""})

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, handlers, api):
        results = await asyncio.gather(
            *(handlers.call("get_channel", {"app_id": "app-1", "channel_id": f"chan-{i}"}) for i in range(5))
        )
        assert [json.loads(text)["id"] for text in results] == [f"chan-{i}" for i in range(5)]
        assert len(api.calls) == 5


class TestArgumentErrors:
    @pytest.mark.asyncio
    async def test_missing_arguments_map(self, handlers, api):
        with pytest.raises(ArgumentError, match="^missing arguments$"):
            await handlers.call("get_application", None)
        assert api.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [{}, {"app_id": 42}, {"app_id": None}])
    async def test_app_id_must_be_a_string(self, handlers, api, args):
        with pytest.raises(ArgumentError) as excinfo:
            await handlers.call("list_releases", args)
        assert str(excinfo.value) == "app_id argument is required and must be a string"
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_second_required_id(self, handlers):
        with pytest.raises(ArgumentError) as excinfo:
            await handlers.call("get_customer", {"app_id": "app-1"})
        assert str(excinfo.value) == "customer_id argument is required and must be a string"

    @pytest.mark.asyncio
    async def test_query_is_required(self, handlers):
        with pytest.raises(ArgumentError) as excinfo:
            await handlers.call("search_channels", {"app_id": "app-1"})
        assert str(excinfo.value) == "query argument is required and must be a string"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tool", "args"),
        [
            ("list_applications", {"limit": 0}),
            ("list_applications", {"limit": 101}),
            ("list_channels", {"app_id": "a", "limit": 2.5}),
            ("list_channels", {"app_id": "a", "limit": "many"}),
            ("search_releases", {"app_id": "a", "query": "x", "limit": 51}),
        ],
    )
    async def test_invalid_limit(self, handlers, api, tool, args):
        with pytest.raises(ArgumentError, match="^limit argument is invalid: "):
            await handlers.call(tool, args)
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_negative_offset(self, handlers):
        with pytest.raises(ArgumentError, match="^offset argument is invalid: "):
            await handlers.call("list_releases", {"app_id": "a", "offset": -1})

    @pytest.mark.asyncio
    async def test_non_object_arguments(self, handlers):
        with pytest.raises(ArgumentError, match="arguments must be a JSON object"):
            await handlers.call("list_applications", ["limit", 5])  # type: ignore[arg-type]
