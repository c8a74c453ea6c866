"""Native httpx transport provider.

Purpose:
    Implements the three transport operations (``send``, ``stream``,
    ``stream_sse``) directly over HTTP with ``httpx.AsyncClient``. Request
    bodies are sent verbatim from ``Input.body``; responses are mapped into
    ``Output`` / ``OutputChunk`` / ``SseEvent`` values.

External dependencies:
    - ``httpx`` for the non-blocking HTTP exchange.

Timeout strategy:
    - Timeouts come from the client: an owned client is built by
      ``build_async_client`` with ``get_timeout_config()``; an injected client
      keeps its own settings. Expired timeouts normalize to ``HTTP_504``.

Error handling:
    - Non-2xx responses, transport faults and undecodable stream lines never
      raise; they become error outputs or one terminal error unit.
    - Structured logging uses ``normalized_log_event`` with ``send.*`` and
      ``stream.*`` events.

Lifecycle:
    - A client created by the provider is closed by ``aclose()`` (or the async
      context manager). An injected client is never closed here.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.http import build_async_client
from ..base.interfaces import LlmClientProvider
from ..base.json_codec import DEFAULT_CODEC, JsonCodec
from ..base.logging import get_logger
from ..base.models import Input, Output, OutputChunk, SseEvent
from ..config import ClientConfig
from .helpers import send_impl, stream_impl, stream_sse_impl


class HttpxLlmProvider(LlmClientProvider):
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        config: Optional[ClientConfig] = None,
        codec: Optional[JsonCodec] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the provider.

        Parameters
        ----------
        http_client:
            Caller-owned ``httpx.AsyncClient``. When omitted, one is built from
            ``config`` (or the merged client configuration) and owned by the
            provider.
        config:
            Configuration for an owned client; ignored when ``http_client`` is given.
        codec:
            JSON codec for chunk decoding and error-body inspection.
        transport:
            Transport override for an owned client (tests use ``httpx.MockTransport``).
        """
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else build_async_client(config, transport=transport)
        self._codec = codec or DEFAULT_CODEC
        self._logger = get_logger("httpx_provider")

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, input: Input) -> Output:
        """POST ``input`` and return the normalized ``Output``.

        2xx responses carry status, headers and raw body. 429 becomes a
        ``RateLimitError`` output, other non-2xx statuses an ``ApiError`` output
        with the HTTP status preserved. Transport failures are normalized.
        """
        return await send_impl(self, input)

    def stream(
        self,
        input: Input,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[OutputChunk]:
        """Stream NDJSON chunks for ``input``.

        Yields chunks in wire order and stops after the first ``done`` chunk.
        Non-2xx statuses, decode failures, transport faults and truncated
        bodies end the stream with one terminal error chunk. Once
        ``cancellation_token`` is cancelled no further chunks are produced.
        """
        return stream_impl(self, input, cancellation_token)

    def stream_sse(
        self,
        input: Input,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[SseEvent]:
        """Stream SSE events for ``input``, ending with the ``[DONE]`` sentinel.

        Failure handling matches :meth:`stream`, with error chunks wrapped in
        ``SseEvent``.
        """
        return stream_sse_impl(self, input, cancellation_token)

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxLlmProvider":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["HttpxLlmProvider"]
