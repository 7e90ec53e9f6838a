"""Test configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from upstage_adapter.constants import PROXY_ENV_VARS
from upstage_adapter.core import UpstageApiClient, create_client


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep proxies from the host environment out of every test."""
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chat_response() -> dict[str, Any]:
    """A successful chat completion body."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1717000000,
        "model": "solar-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hello there"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


class RecordingTransport:
    """Builds a mock transport and keeps every request it saw."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def make_client() -> Callable[..., tuple[UpstageApiClient, RecordingTransport]]:
    """Create a client wired to a recording mock transport."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        **kwargs: Any,
    ) -> tuple[UpstageApiClient, RecordingTransport]:
        recorder = RecordingTransport(handler)
        client = create_client("test-key", transport=recorder.transport, **kwargs)
        return client, recorder

    return _make
