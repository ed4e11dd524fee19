from __future__ import annotations

from adroast.config.settings import Settings
from adroast.exceptions.errors import MissingConfiguration
from adroast.llm.base import LLMAdapter
from adroast.llm.anthropic_native import AnthropicAdapter
from adroast.llm.ollama import OllamaAdapter
from adroast.llm.openai_compat import OpenAICompatAdapter


def get_llm_adapter(settings: Settings) -> LLMAdapter:
    if settings.llm_provider == "anthropic":
        if not settings.anthropic_api_key:
            raise MissingConfiguration()
        return AnthropicAdapter(
            model=settings.anthropic_model,
            api_key=settings.anthropic_api_key,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.llm_timeout_seconds,
        )
    if settings.llm_provider == "openai_compat":
        return OpenAICompatAdapter(
            model=settings.openai_compat_model,
            base_url=settings.openai_compat_base_url,
            api_key=settings.openai_compat_api_key,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.llm_timeout_seconds,
        )
    if settings.llm_provider == "ollama":
        return OllamaAdapter(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.llm_timeout_seconds,
        )
    raise ValueError(f"Unknown llm_provider: {settings.llm_provider}")
