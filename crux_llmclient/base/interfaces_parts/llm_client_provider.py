"""LlmClientProvider Protocol (single-class module).

Defines the transport capability every backend variant implements.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, runtime_checkable

from ..models import Input, Output, OutputChunk, SseEvent


@runtime_checkable
class LlmClientProvider(Protocol):
    """Transport strategy with exactly three operations.

    Implementations never raise for transport, provider or decode failures:
    ``send`` returns an error-shaped ``Output`` and the stream operations end
    with one terminal error unit. Streams are lazy, finite, not restartable and
    release their connection when closed.
    """

    async def send(self, input: Input) -> Output:
        """Execute a single request/response exchange."""
        ...

    def stream(self, input: Input) -> AsyncIterator[OutputChunk]:
        """Return an NDJSON chunk stream for ``input``."""
        ...

    def stream_sse(self, input: Input) -> AsyncIterator[SseEvent]:
        """Return an SSE event stream for ``input``."""
        ...
