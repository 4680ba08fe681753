from __future__ import annotations

from typing import Callable, List

import pytest
from fastapi.testclient import TestClient

from fakes import FakeProvider
from promptgate.core.config import get_settings
from promptgate.main import create_app


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHAT_CLIENT", "anthropic")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    monkeypatch.delenv("CHAT_DEFAULT_MAX_TOKENS", raising=False)
    monkeypatch.delenv("EVAL_MAX_TOKENS", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_client() -> Callable[[FakeProvider], TestClient]:
    clients: List[TestClient] = []

    def _make(provider: FakeProvider) -> TestClient:
        client = TestClient(create_app(provider=provider))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
