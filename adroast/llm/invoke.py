from __future__ import annotations

import httpx
from langchain_core.runnables import Runnable

from adroast.exceptions.errors import UpstreamError


async def invoke_chain(chain: Runnable, payload: dict):
    try:
        return await chain.ainvoke(payload)
    except (httpx.ConnectError, httpx.TimeoutException, ConnectionError) as e:
        raise UpstreamError("LLM backend is unavailable") from e
