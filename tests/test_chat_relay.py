from __future__ import annotations

import pytest

from fakes import FakeProvider
from promptgate.core.errors import ClientInputError, UpstreamFailure
from promptgate.utils.chat.schemas import ChatRequest, Done, Error, TextDelta, is_terminal
from promptgate.utils.chat.service import ChatRelay


async def _collect(relay: ChatRelay, req: ChatRequest) -> list:
    return [event async for event in relay.events(req)]


async def test_relay_streams_deltas_then_done() -> None:
    provider = FakeProvider(["Hi", " there"])
    events = await _collect(ChatRelay(provider), ChatRequest(message="Hello"))

    assert events == [TextDelta(text="Hi"), TextDelta(text=" there"), Done()]


async def test_relay_emits_error_after_partial_output() -> None:
    provider = FakeProvider(["Hi", RuntimeError("upstream dropped")])
    events = await _collect(ChatRelay(provider), ChatRequest(message="Hi"))

    assert events == [TextDelta(text="Hi"), Error(message="upstream dropped")]


async def test_relay_raises_when_upstream_fails_before_first_delta() -> None:
    provider = FakeProvider([ConnectionError("refused")])

    with pytest.raises(UpstreamFailure) as info:
        await _collect(ChatRelay(provider), ChatRequest(message="Hi"))

    assert info.value.status_code == 500
    assert info.value.detail == "refused"


@pytest.mark.parametrize(
    "script",
    [
        [],
        ["a"],
        ["a", "b", "c"],
        ["a", ValueError("x")],
        ["a", "", "b", KeyError("k")],
    ],
)
async def test_relay_has_exactly_one_terminal_event_last(script) -> None:
    events = await _collect(ChatRelay(FakeProvider(script)), ChatRequest(message="go"))

    terminals = [e for e in events if is_terminal(e)]
    assert len(terminals) == 1
    assert is_terminal(events[-1])


async def test_relay_skips_empty_deltas() -> None:
    provider = FakeProvider(["", "one", "", "two"])
    events = await _collect(ChatRelay(provider), ChatRequest(message="go"))

    assert events == [TextDelta(text="one"), TextDelta(text="two"), Done()]


async def test_relay_rejects_missing_message_before_upstream_call() -> None:
    provider = FakeProvider(["never"])

    with pytest.raises(ClientInputError):
        await _collect(ChatRelay(provider), ChatRequest())

    assert provider.stream_calls == []


async def test_relay_passes_single_user_turn_system_and_budget() -> None:
    provider = FakeProvider(["ok"])
    req = ChatRequest.model_validate({"message": "Hello", "systemPrompt": "Be brief.", "maxTokens": 64})

    await _collect(ChatRelay(provider), req)

    assert provider.stream_calls == [
        {"messages": [{"role": "user", "content": "Hello"}], "system": "Be brief.", "max_tokens": 64}
    ]


async def test_relay_defaults_token_budget() -> None:
    provider = FakeProvider(["ok"])

    await _collect(ChatRelay(provider, default_max_tokens=1024), ChatRequest(message="Hello"))

    assert provider.stream_calls[0]["max_tokens"] == 1024
    assert provider.stream_calls[0]["system"] is None


async def test_relay_closes_upstream_when_consumer_stops_early() -> None:
    provider = FakeProvider(["a", "b", "c"])
    events = ChatRelay(provider).events(ChatRequest(message="go"))

    first = await events.__anext__()
    await events.aclose()

    assert first == TextDelta(text="a")
    assert provider.closed_streams == 1
