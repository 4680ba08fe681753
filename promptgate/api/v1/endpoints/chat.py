from __future__ import annotations

import json
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from promptgate.api.deps import get_chat_relay
from promptgate.utils.chat.schemas import ChatEvent, ChatRequest, Done, Error, TextDelta, is_terminal
from promptgate.utils.chat.service import ChatRelay, validate_chat_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

DONE_SENTINEL = "data: [DONE]\n\n"


def _sse(data: dict) -> str:
    """Format data as Server-Sent Event (SSE)."""
    return f"data: {json.dumps(data, ensure_ascii=False)}\n\n"


def encode_event(event: ChatEvent) -> str:
    if isinstance(event, TextDelta):
        return _sse({"text": event.text})
    if isinstance(event, Error):
        return _sse({"error": event.message})
    if isinstance(event, Done):
        return DONE_SENTINEL
    raise TypeError(f"unknown chat event: {event!r}")


@router.options("")
async def chat_preflight() -> Response:
    return Response(status_code=200)


@router.post("")
async def chat_stream(
    request: Request,
    body: ChatRequest,
    relay: ChatRelay = Depends(get_chat_relay),
) -> StreamingResponse:
    """Relay a single user message to the model via Server-Sent Events (SSE)."""
    validate_chat_request(body)

    events = relay.events(body)
    # Pull the first event before committing to a stream so that an upstream
    # failure here is still answered with a plain 500.
    first = await events.__anext__()

    async def close_upstream() -> None:
        # Runs after the response even when the body was never iterated.
        await events.aclose()

    async def event_generator() -> AsyncIterator[str]:
        try:
            yield encode_event(first)
            if is_terminal(first):
                return

            async for event in events:
                if await request.is_disconnected():
                    logger.info("Client disconnected, closing upstream stream")
                    break
                yield encode_event(event)
        finally:
            await events.aclose()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache",
                 "Connection": "keep-alive", "X-Accel-Buffering": "no"},
        background=BackgroundTask(close_upstream),
    )
