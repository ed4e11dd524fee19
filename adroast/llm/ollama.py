from __future__ import annotations
from typing import Sequence

import httpx
from langchain_core.messages import BaseMessage
from langchain_ollama import ChatOllama

from adroast.exceptions.errors import UpstreamError

from .base import LLMAdapter


class OllamaAdapter(LLMAdapter):
    """Local models through an Ollama server, JSON output mode."""

    def __init__(
        self,
        model: str,
        base_url: str,
        temperature: float,
        max_tokens: int,
        timeout: float | None = None,
    ):
        self.chat = ChatOllama(
            model=model,
            base_url=base_url,
            temperature=temperature,
            num_predict=max_tokens,
            format="json",
            client_kwargs={"timeout": timeout},
        )
        self._model = model
        self._base_url = base_url

    @property
    def provider(self) -> str:
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model

    async def ainvoke(self, messages: Sequence[BaseMessage]) -> str:
        try:
            res = await self.chat.ainvoke(messages)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Ollama request failed: {e}") from e
        return res.content if hasattr(res, "content") else str(res)
