from __future__ import annotations
from typing import AsyncIterator, List, Optional
from openai import AsyncOpenAI

from promptgate.infrastructure.llm.base import BaseLLMProvider, Message
from promptgate.infrastructure.llm.openai import with_system


class VLLMProvider(BaseLLMProvider):
    """VLLM (OpenAI-compatible server) provider for chat interactions."""
    def __init__(self, base_url: str, api_key: str, default_model: str, timeout: float = 120.0):
        self.client = AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
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
        """Streams chat responses from the VLLM model."""
        stream = await self.client.chat.completions.create(
            model=self.default_model,
            messages=with_system(messages, system),
            max_tokens=max_tokens,
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
        response = await self.client.chat.completions.create(
            model=self.default_model,
            messages=with_system(messages, system),
            max_tokens=max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self.client.close()
