from __future__ import annotations

from typing import Any, AsyncIterator, List, Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from promptgate.infrastructure.llm.base import BaseLLMProvider, Message


def text_blocks(content: Any) -> List[str]:
    """Normalize message content; Anthropic can return a list of blocks or a string.

    Only text blocks are kept, tool-use and other structural blocks are dropped.
    """
    if isinstance(content, str):
        return [content] if content else []
    blocks: List[str] = []
    if isinstance(content, list):
        for block in content:
            if isinstance(block, str):
                if block:
                    blocks.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                text = block.get("text")
                if text:
                    blocks.append(text)
    return blocks


def to_langchain(messages: List[Message], system: Optional[str]) -> List[BaseMessage]:
    converted: List[BaseMessage] = [SystemMessage(content=system)] if system else []
    for m in messages:
        if m["role"] == "assistant":
            converted.append(AIMessage(content=m["content"]))
        else:
            converted.append(HumanMessage(content=m["content"]))
    return converted


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Messages API provider for chat interactions."""

    def __init__(self, api_key: str, default_model: str, timeout: float = 120.0):
        self.llm = ChatAnthropic(
            model=default_model,
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
        """Streams content_block_delta text from the Anthropic model."""
        async for chunk in self.llm.astream(to_langchain(messages, system), max_tokens=max_tokens):
            for text in text_blocks(chunk.content):
                yield text

    async def complete(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> str:
        """Returns the first text block of the response."""
        response = await self.llm.ainvoke(to_langchain(messages, system), max_tokens=max_tokens)
        blocks = text_blocks(response.content)
        return blocks[0] if blocks else ""
