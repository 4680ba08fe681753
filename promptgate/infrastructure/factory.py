from __future__ import annotations

from promptgate.core.config import Settings, get_settings

from promptgate.infrastructure.llm.anthropic import AnthropicProvider
from promptgate.infrastructure.llm.base import BaseLLMProvider
from promptgate.infrastructure.llm.openai import OpenAIProvider
from promptgate.infrastructure.llm.vllm import VLLMProvider


class InfrastructureFactory:
    """Central factory for the gateway's external collaborators."""

    @staticmethod
    def get_llm_provider(settings: Settings | None = None) -> BaseLLMProvider:
        """Returns the LLM provider selected by ``chat_client``."""
        settings = settings or get_settings()
        client_type = settings.chat_client.lower()

        if client_type == "anthropic":
            return AnthropicProvider(
                api_key=settings.anthropic_api_key,
                default_model=settings.anthropic_model,
                timeout=settings.upstream_timeout
            )
        elif client_type == "vllm":
            return VLLMProvider(
                base_url=settings.chat_base_url,
                api_key=settings.vllm_chat_api_key,
                default_model=settings.chat_model_id,
                timeout=settings.upstream_timeout
            )
        elif client_type == "openai":
            return OpenAIProvider(
                api_key=settings.openai_api_key,
                default_model=settings.openai_model,
                timeout=settings.upstream_timeout
            )
        else:
            raise ValueError(f"Unsupported chat_client: {client_type}")
