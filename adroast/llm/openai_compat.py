from __future__ import annotations
from typing import Sequence

import openai
from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from adroast.exceptions.errors import UpstreamError

from .base import LLMAdapter


class OpenAICompatAdapter(LLMAdapter):
    """
    Any OpenAI-compatible `/v1/chat/completions` server (vLLM, LiteLLM, OpenAI
    itself), reached through ChatOpenAI with a custom base_url.
    """
    def __init__(
        self,
        model: str,
        base_url: str,
        api_key: str,
        temperature: float,
        max_tokens: int,
        timeout: float | None = None,
    ):
        self.chat = ChatOpenAI(
            model=model,
            base_url=base_url,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model
        self._base_url = base_url

    @property
    def provider(self) -> str:
        return "openai_compat"

    @property
    def model_name(self) -> str:
        return self._model

    async def ainvoke(self, messages: Sequence[BaseMessage]) -> str:
        try:
            res = await self.chat.ainvoke(messages)
        except openai.APIStatusError as e:
            raise UpstreamError(e.message or "API error", details=e.body) from e
        except openai.APIConnectionError as e:
            raise UpstreamError("LLM backend is unavailable") from e
        return res.content if hasattr(res, "content") else str(res)
