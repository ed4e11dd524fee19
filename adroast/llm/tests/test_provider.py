"""
Tests for provider.py and the Anthropic adapter
"""
from types import SimpleNamespace

import anthropic
import httpx
import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from adroast.config.settings import Settings
from adroast.exceptions.errors import MissingConfiguration, UpstreamError
from adroast.llm.anthropic_native import AnthropicAdapter, response_text, split_messages
from adroast.llm.ollama import OllamaAdapter
from adroast.llm.openai_compat import OpenAICompatAdapter
from adroast.llm.provider import get_llm_adapter


class TestProviderSelection:
    def test_anthropic(self):
        adapter = get_llm_adapter(Settings(llm_provider="anthropic", anthropic_api_key="sk-ant-test"))

        assert isinstance(adapter, AnthropicAdapter)
        assert adapter.provider == "anthropic"
        assert adapter.model_name == "claude-sonnet-4-20250514"

    def test_anthropic_without_key(self):
        with pytest.raises(MissingConfiguration):
            get_llm_adapter(Settings(llm_provider="anthropic", anthropic_api_key=None))

    def test_openai_compat(self):
        adapter = get_llm_adapter(Settings(llm_provider="openai_compat", openai_compat_model="qwen2.5-7b"))

        assert isinstance(adapter, OpenAICompatAdapter)
        assert adapter.model_name == "qwen2.5-7b"

    def test_ollama(self):
        adapter = get_llm_adapter(Settings(llm_provider="ollama"))

        assert isinstance(adapter, OllamaAdapter)
        assert adapter.provider == "ollama"

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_llm_adapter(Settings(llm_provider="carrier-pigeon"))


class FakeMessages:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.response


def adapter_with(messages: FakeMessages) -> AnthropicAdapter:
    client = SimpleNamespace(messages=messages)
    return AnthropicAdapter(model="claude-test", api_key="k", temperature=0.3, max_tokens=4000, client=client)


class TestAnthropicAdapter:
    def test_split_messages(self):
        system, turns = split_messages(
            [SystemMessage(content="be honest"), HumanMessage(content="roast this"), AIMessage(content="ok")]
        )

        assert system == "be honest"
        assert turns == [{"role": "user", "content": "roast this"}, {"role": "assistant", "content": "ok"}]

    def test_response_text_joins_text_blocks(self):
        response = SimpleNamespace(
            content=[SimpleNamespace(type="text", text='{"a": '), SimpleNamespace(type="text", text="1}")]
        )
        assert response_text(response) == '{"a": 1}'

    @pytest.mark.asyncio
    async def test_request_shape(self):
        messages = FakeMessages(response=SimpleNamespace(content=[SimpleNamespace(type="text", text="{}")]))

        text = await adapter_with(messages).ainvoke([SystemMessage(content="sys"), HumanMessage(content="user")])

        assert text == "{}"
        assert messages.kwargs == {
            "model": "claude-test",
            "max_tokens": 4000,
            "temperature": 0.3,
            "system": "sys",
            "messages": [{"role": "user", "content": "user"}],
        }

    @pytest.mark.asyncio
    async def test_status_error_becomes_upstream_error(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        response = httpx.Response(529, request=request)
        body = {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
        error = anthropic.APIStatusError("Overloaded", response=response, body=body)

        with pytest.raises(UpstreamError) as exc:
            await adapter_with(FakeMessages(error=error)).ainvoke([HumanMessage(content="x")])

        assert exc.value.message == "Overloaded"
        assert exc.value.details == body

    @pytest.mark.asyncio
    async def test_connection_error_becomes_upstream_error(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.APIConnectionError(request=request)

        with pytest.raises(UpstreamError) as exc:
            await adapter_with(FakeMessages(error=error)).ainvoke([HumanMessage(content="x")])

        assert exc.value.message == "LLM backend is unavailable"
