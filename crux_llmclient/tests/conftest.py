"""Pytest configuration for the client test suite.

Provides:
- an autouse fixture isolating tests from ``LLMCLIENT_*`` environment
  variables and the cached config file;
- ``recorder``: an ``httpx.MockTransport`` factory that records every request;
- ``make_input``: builds chat ``Input`` values against the mock base URL.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List

import httpx
import pytest

from crux_llmclient.base.models import Input, InputBody, Message
from crux_llmclient.config import ClientConfig, reset_config_cache

from crux_llmclient.tests.utils import BASE_URL, CHAT_URL


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip client env vars and reset config caches around each test."""
    for name in (
        "LLMCLIENT_CONFIG_FILE",
        "LLMCLIENT_BASE_URL",
        "LLMCLIENT_MODEL",
        "LLMCLIENT_API_KEY",
        "LLMCLIENT_BLOCKING_WORKERS",
        "LLMCLIENT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@dataclass
class Recorder:
    """Collects requests seen by a mock transport."""

    handler: Callable[[httpx.Request], httpx.Response]
    requests: List[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def config(self) -> ClientConfig:
        return ClientConfig(base_url=BASE_URL)


@pytest.fixture()
def recorder() -> Callable[[Callable[[httpx.Request], httpx.Response]], Recorder]:
    """Return a factory wrapping a request handler in a recording transport."""
    return Recorder


@pytest.fixture()
def make_input() -> Callable[..., Input]:
    """Return a builder for chat inputs aimed at the mock endpoint."""

    def _make(content: str = "Hi", *, stream: bool = False, model: str | None = "test-model", **headers: str) -> Input:
        body = InputBody.chat(model, [Message.user(content)], stream)
        return Input.chat(CHAT_URL, body, headers or None)

    return _make
