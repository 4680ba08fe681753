from __future__ import annotations
from typing import AsyncIterator, List, Optional
from openai import AsyncOpenAI
from httpx import Timeout

from promptgate.infrastructure.llm.base import BaseLLMProvider, Message


def with_system(messages: List[Message], system: Optional[str]) -> List[Message]:
    """Chat-completions APIs take the system instruction as the first message."""
    if not system:
        return list(messages)
    return [{"role": "system", "content": system}, *messages]


class OpenAIProvider(BaseLLMProvider):
    """
    OpenAI provider for chat interactions.
    """
    def __init__(self, api_key: str, default_model: str, timeout: float = 120.0):
        self.client = AsyncOpenAI(
            api_key=api_key,
            timeout=Timeout(connect=10.0, read=timeout, write=10.0, pool=10.0),
            max_retries=0,
        )
        self.default_model = default_model

    async def stream_chat(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> AsyncIterator[str]:
        """Streams chat responses from the OpenAI model."""
        stream = await self.client.chat.completions.create(
            model=self.default_model,
            messages=with_system(messages, system),
            max_completion_tokens=max_tokens,
            stream=True,
        )

        async for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content

            #stop signal
            if chunk.choices and chunk.choices[0].finish_reason == "stop":
                break

    async def complete(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> str:
        """Returns the text of the first choice."""
        response = await self.client.chat.completions.create(
            model=self.default_model,
            messages=with_system(messages, system),
            max_completion_tokens=max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self.client.close()
