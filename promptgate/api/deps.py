from __future__ import annotations

from fastapi import Depends, Request

from promptgate.core.config import Settings, get_settings
from promptgate.core.errors import GatewayError
from promptgate.infrastructure.llm.base import BaseLLMProvider
from promptgate.utils.chat.service import ChatRelay
from promptgate.utils.evaluate.service import PromptEvaluator


def get_provider(request: Request) -> BaseLLMProvider:
    """The process-wide provider built at startup."""
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        raise GatewayError("LLM provider not ready")
    return provider


def get_chat_relay(
    provider: BaseLLMProvider = Depends(get_provider),
    settings: Settings = Depends(get_settings),
) -> ChatRelay:
    return ChatRelay(provider, default_max_tokens=settings.chat_default_max_tokens)


def get_prompt_evaluator(
    provider: BaseLLMProvider = Depends(get_provider),
    settings: Settings = Depends(get_settings),
) -> PromptEvaluator:
    return PromptEvaluator(provider, max_tokens=settings.eval_max_tokens)
