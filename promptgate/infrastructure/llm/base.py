from __future__ import annotations
from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict, List, Optional

Message = Dict[str, str]


class BaseLLMProvider(ABC):
    """Chat-completion service with a streaming and a non-streaming capability.

    Providers are built once per process and shared by every request, so
    implementations must not keep per-request state.
    """

    @abstractmethod
    async def stream_chat(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> AsyncIterator[str]:
        """Streams text deltas in upstream order, skipping non-text events."""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> str:
        """Returns the first text block of a single, non-streamed response."""
        pass

    async def aclose(self) -> None:
        """Releases transport resources held by the provider."""
        return None

    @staticmethod
    def user_turn(content: str) -> List[Message]:
        """Builds a message list holding a single user turn."""
        return [{"role": "user", "content": content}]
