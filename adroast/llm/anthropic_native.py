"""
Anthropic Messages API adapter (Claude models).

Uses the official `anthropic` SDK. Requires ANTHROPIC_API_KEY.
"""

from __future__ import annotations

from typing import Any, Sequence

import anthropic
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage

from adroast.exceptions.errors import UpstreamError

from .base import LLMAdapter


class AnthropicAdapter(LLMAdapter):
    def __init__(
        self,
        model: str,
        api_key: str,
        temperature: float,
        max_tokens: int,
        timeout: float | None = None,
        client: anthropic.AsyncAnthropic | None = None,
    ):
        # no SDK-level retries: a transient failure is reported once
        self.client = client or anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def provider(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model

    async def ainvoke(self, messages: Sequence[BaseMessage]) -> str:
        system, turns = split_messages(messages)
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": turns,
        }
        if system:
            kwargs["system"] = system
        try:
            response = await self.client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            raise UpstreamError(e.message or "API error", details=e.body) from e
        except anthropic.APIConnectionError as e:
            raise UpstreamError("LLM backend is unavailable") from e
        return response_text(response)


def split_messages(messages: Sequence[BaseMessage]) -> tuple[str, list[dict[str, str]]]:
    """langchain messages -> (system prompt, Messages API turns)."""
    system_parts: list[str] = []
    turns: list[dict[str, str]] = []
    for message in messages:
        content = message.content if isinstance(message.content, str) else str(message.content)
        if isinstance(message, SystemMessage):
            system_parts.append(content)
        elif isinstance(message, AIMessage):
            turns.append({"role": "assistant", "content": content})
        else:
            turns.append({"role": "user", "content": content})
    return "\n\n".join(system_parts), turns


def response_text(response: object) -> str:
    content = ""
    for block in getattr(response, "content", []) or []:
        text = getattr(block, "text", None)
        if text:
            content += text
    return content
