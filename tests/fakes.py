from __future__ import annotations

import json
from typing import AsyncIterator, List, Optional, Sequence, Union

from promptgate.infrastructure.llm.base import BaseLLMProvider, Message

Step = Union[str, BaseException]


class FakeProvider(BaseLLMProvider):
    """Scripted provider: strings are streamed as deltas, exceptions are raised in place."""

    def __init__(
        self,
        script: Sequence[Step] = (),
        completion: Union[str, BaseException] = "",
    ) -> None:
        self.script = list(script)
        self.completion = completion
        self.stream_calls: List[dict] = []
        self.complete_calls: List[dict] = []
        self.closed_streams = 0

    async def stream_chat(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> AsyncIterator[str]:
        self.stream_calls.append({"messages": messages, "system": system, "max_tokens": max_tokens})
        try:
            for step in self.script:
                if isinstance(step, BaseException):
                    raise step
                yield step
        finally:
            self.closed_streams += 1

    async def complete(
        self,
        messages: List[Message],
        *,
        system: Optional[str] = None,
        max_tokens: int,
    ) -> str:
        self.complete_calls.append({"messages": messages, "system": system, "max_tokens": max_tokens})
        if isinstance(self.completion, BaseException):
            raise self.completion
        return self.completion


def verdict_json(**overrides) -> str:
    payload = {
        "approved": False,
        "score": 4,
        "suggestion": "add a reflect() function that takes a journal entry",
        "explanation": "Naming the function tells Claude exactly what to build.",
        "extractedPrompt": None,
    }
    payload.update(overrides)
    return json.dumps(payload)

