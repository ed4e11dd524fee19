"""
Tests for notion_client.py
"""
import json

import httpx
import pytest

from adroast.exceptions.errors import StorageError
from adroast.storage.notion_client import NotionClient


def make_client(handler) -> NotionClient:
    return NotionClient("secret-token", transport=httpx.MockTransport(handler))


class TestNotionClient:
    @pytest.mark.asyncio
    async def test_create_page_request(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "page-1"})

        page = await make_client(handler).create_page("db-1", {"Lead": {}}, [{"type": "divider"}])

        assert page == {"id": "page-1"}
        assert seen["method"] == "POST"
        assert seen["path"] == "/v1/pages"
        assert seen["headers"]["Authorization"] == "Bearer secret-token"
        assert seen["headers"]["Notion-Version"] == "2022-06-28"
        assert seen["body"] == {
            "parent": {"database_id": "db-1"},
            "properties": {"Lead": {}},
            "children": [{"type": "divider"}],
        }

    @pytest.mark.asyncio
    async def test_query_database_filter(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/databases/db-1/query"
            body = json.loads(request.content)
            assert body == {"filter": {"property": "Report ID", "rich_text": {"equals": "Ab3dEf7h"}}}
            return httpx.Response(200, json={"results": [{"id": "page-9"}]})

        results = await make_client(handler).query_database(
            "db-1", {"property": "Report ID", "rich_text": {"equals": "Ab3dEf7h"}}
        )
        assert results == [{"id": "page-9"}]

    @pytest.mark.asyncio
    async def test_list_block_children_follows_pagination(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            cursor = request.url.params.get("start_cursor")
            calls.append(cursor)
            if cursor is None:
                return httpx.Response(
                    200, json={"results": [{"id": "b1"}, {"id": "b2"}], "has_more": True, "next_cursor": "c2"}
                )
            return httpx.Response(200, json={"results": [{"id": "b3"}], "has_more": False, "next_cursor": None})

        blocks = await make_client(handler).list_block_children("page-1")

        assert [b["id"] for b in blocks] == ["b1", "b2", "b3"]
        assert calls == [None, "c2"]

    @pytest.mark.asyncio
    async def test_error_status_raises_with_details(self):
        notion_error = {"object": "error", "status": 400, "code": "validation_error", "message": "bad property"}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json=notion_error)

        with pytest.raises(StorageError) as exc:
            await make_client(handler).create_page("db-1", {}, [])

        assert exc.value.message == "Failed to save"
        assert exc.value.details == notion_error

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StorageError) as exc:
            await make_client(handler).query_database("db-1", {})
        assert exc.value.message == "Database query failed"
