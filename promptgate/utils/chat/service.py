from __future__ import annotations

import logging
import time
from typing import AsyncIterator

from promptgate.core.errors import ClientInputError, UpstreamFailure
from promptgate.infrastructure.llm.base import BaseLLMProvider
from promptgate.utils.chat.schemas import ChatEvent, ChatRequest, Done, Error, TextDelta

logger = logging.getLogger(__name__)

UPSTREAM_ERROR = "Upstream model error"


def validate_chat_request(req: ChatRequest) -> None:
    """Fail fast, before any upstream call, when the message is missing."""
    if not req.message:
        raise ClientInputError("message is required")


class ChatRelay:
    """
    Re-streams upstream text deltas as ChatEvents.

    Every sequence produced by ``events`` ends with exactly one ``Done`` or
    ``Error``. A failure before the first delta is raised as UpstreamFailure
    instead, because nothing has been sent to the caller yet.
    """

    def __init__(self, provider: BaseLLMProvider, *, default_max_tokens: int = 1024) -> None:
        self._provider = provider
        self._default_max_tokens = default_max_tokens

    def resolve_max_tokens(self, req: ChatRequest) -> int:
        return req.max_tokens or self._default_max_tokens

    async def events(self, req: ChatRequest) -> AsyncIterator[ChatEvent]:
        validate_chat_request(req)

        started = time.monotonic()
        sent = 0
        stream = self._provider.stream_chat(
            self._provider.user_turn(req.message),
            system=req.system_prompt or None,
            max_tokens=self.resolve_max_tokens(req),
        )

        try:
            async for delta in stream:
                if not delta:
                    continue
                sent += 1
                yield TextDelta(text=delta)
        except Exception as exc:
            if sent == 0:
                logger.exception("Chat relay failed before streaming")
                raise UpstreamFailure.from_exception(UPSTREAM_ERROR, exc) from exc

            logger.exception("Chat relay failed mid-stream after %s deltas", sent)
            yield Error(message=str(exc) or exc.__class__.__name__)
            return
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

        logger.info("Chat relay finished deltas=%s elapsed=%.2fs", sent, time.monotonic() - started)
        yield Done()
