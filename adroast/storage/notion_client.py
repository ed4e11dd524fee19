from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from adroast.exceptions.errors import StorageError

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com/v1"


class NotionClient:
    """
    Minimal async Notion REST client: create a database page, query a
    database, list a page's child blocks.

    Non-2xx responses raise StorageError carrying Notion's error body.
    """

    def __init__(
        self,
        api_key: str,
        *,
        notion_version: str = "2022-06-28",
        timeout: float = 30.0,
        base_url: str = NOTION_API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Notion-Version": notion_version,
        }
        self._timeout = timeout
        self._base_url = base_url
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        error_message: str,
    ) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, json=json, params=params)
            except httpx.HTTPError as e:
                logger.error("NOTION_TRANSPORT %s %s error=%s", method, path, e)
                raise StorageError(error_message) from e

        try:
            data = response.json()
        except ValueError:
            data = {"status": response.status_code, "body": response.text[:500]}

        if response.is_error:
            logger.error("NOTION_ERROR %s %s status=%s body=%s", method, path, response.status_code, data)
            raise StorageError(error_message, details=data)
        return data

    async def create_page(
        self,
        database_id: str,
        properties: Dict[str, Any],
        children: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/pages",
            json={
                "parent": {"database_id": database_id},
                "properties": properties,
                "children": children,
            },
            error_message="Failed to save",
        )

    async def query_database(self, database_id: str, filter: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = await self._request(
            "POST",
            f"/databases/{database_id}/query",
            json={"filter": filter},
            error_message="Database query failed",
        )
        return list(data.get("results") or [])

    async def list_block_children(self, block_id: str, page_size: int = 100) -> List[Dict[str, Any]]:
        """All child blocks of `block_id`, in order, following pagination."""
        blocks: List[Dict[str, Any]] = []
        cursor: Optional[str] = None
        while True:
            params: Dict[str, Any] = {"page_size": page_size}
            if cursor:
                params["start_cursor"] = cursor
            data = await self._request(
                "GET",
                f"/blocks/{block_id}/children",
                params=params,
                error_message="Failed to fetch report data",
            )
            blocks.extend(data.get("results") or [])
            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                return blocks

    async def append_block_children(self, block_id: str, children: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/blocks/{block_id}/children",
            json={"children": children},
            error_message="Failed to save",
        )
