from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Chat relay request schema."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message: Optional[str] = None
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", gt=0)


class TextDelta(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class Done(BaseModel):
    kind: Literal["done"] = "done"


class Error(BaseModel):
    """Terminal mid-stream failure; the stream must not be retried."""
    kind: Literal["error"] = "error"
    message: str


ChatEvent = Union[TextDelta, Done, Error]


def is_terminal(event: ChatEvent) -> bool:
    return isinstance(event, (Done, Error))
