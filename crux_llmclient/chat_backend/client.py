"""Provider adapting a chat-oriented backend to the transport interface.

Purpose:
    Lets any ``ChatBackend`` (an SDK client, an in-process model, a test
    double) serve ``send`` / ``stream`` / ``stream_sse`` with the same
    termination and error contract as the native HTTP transport:

    - ``send`` returns ``Output.for_message`` with the assistant reply.
    - ``stream`` yields one chunk per fragment (increasing index, ``done=False``)
      followed by a ``done=True`` chunk with empty content.
    - ``stream_sse`` yields the same chunks wrapped in ``SseEvent`` and then
      the ``[DONE]`` sentinel.
    - Any backend exception becomes an error ``Output`` or one terminal
      error unit.

The backend only sees messages and ``ChatOptions``; ``Input.body`` is not
re-parsed. Inputs without an ``InputBody`` are rejected as configuration errors.
"""

from __future__ import annotations

import time
from contextlib import aclosing
from typing import AsyncIterator, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import ConfigurationError, error_from_exception
from ..base.interfaces import ChatBackend, ChatOptions, LlmClientProvider
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Input, InputBody, Message, Output, OutputChunk, ResponseMode, SseEvent
from ..base.streaming import TerminationGuard


def _require_body(input: Input) -> InputBody:
    if input.input_body is None:
        raise ConfigurationError("chat backend requires an Input built from an InputBody")
    return input.input_body


def _context(input: Input, mode: ResponseMode) -> LogContext:
    model = input.input_body.model if input.input_body is not None else None
    return LogContext(url=input.url, model=model, mode=mode.value, extra={"transport": "chat_backend"})


async def _aclose(iterator: object) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


class ChatBackendLlmProvider(LlmClientProvider):
    """Transport variant backed by a :class:`ChatBackend`."""

    def __init__(self, backend: ChatBackend) -> None:
        if backend is None:
            raise ConfigurationError("backend must not be None")
        self._backend = backend
        self._logger = get_logger("chat_backend")

    @property
    def backend(self) -> ChatBackend:
        return self._backend

    async def send(self, input: Input) -> Output:
        """Complete the conversation and return the assistant message."""
        body = _require_body(input)
        ctx = _context(input, ResponseMode.SINGLE)
        normalized_log_event(self._logger, "send.start", ctx, phase="start", attempt=1, emitted=None)
        t0 = time.perf_counter()
        try:
            text = await self._backend.complete(body.messages, ChatOptions.from_input_body(body))
        except Exception as e:
            error = error_from_exception(e)
            normalized_log_event(
                self._logger,
                "send.error",
                ctx,
                phase="finalize",
                attempt=1,
                emitted=False,
                error_code=error.code,
                error_type=error.type,
            )
            return Output.for_error(error)
        normalized_log_event(
            self._logger,
            "send.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return Output.for_message(Message.assistant(text or ""))

    async def _chunks(
        self,
        input: Input,
        mode: ResponseMode,
        guard: TerminationGuard,
        cancellation_token: Optional[CancellationToken],
    ) -> AsyncIterator[OutputChunk]:
        body = _require_body(input)
        ctx = _context(input, mode)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1, emitted=None)
        index = 0
        fragments = None
        try:
            fragments = self._backend.stream(body.messages, ChatOptions.from_input_body(body))
            async for fragment in fragments:
                if cancellation_token is not None and cancellation_token.cancelled:
                    normalized_log_event(
                        self._logger, "stream.end", ctx, phase="finalize", attempt=1, emitted=guard.emitted, cancelled=True
                    )
                    return
                yield guard.accept(OutputChunk(Message.assistant(fragment or ""), False, index))
                index += 1
        except Exception as e:
            chunk = guard.fail(error_from_exception(e))
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="finalize",
                attempt=1,
                emitted=guard.emitted,
                error_code=chunk.error.code if chunk.error is not None else None,
            )
            yield chunk
            return
        finally:
            await _aclose(fragments)
        yield guard.accept(OutputChunk(Message.assistant(""), True, index))
        normalized_log_event(self._logger, "stream.end", ctx, phase="finalize", attempt=1, emitted=guard.emitted)

    async def stream(
        self,
        input: Input,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[OutputChunk]:
        """Stream fragments as chunks, ending with a ``done`` chunk or an error chunk."""
        chunks = self._chunks(input, ResponseMode.NDJSON, TerminationGuard(), cancellation_token)
        async with aclosing(chunks):
            async for chunk in chunks:
                yield chunk

    async def stream_sse(
        self,
        input: Input,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[SseEvent]:
        """Stream fragments as SSE events, ending with ``[DONE]`` or an error event."""
        guard = TerminationGuard(sentinel_terminated=True)
        chunks = self._chunks(input, ResponseMode.SSE, guard, cancellation_token)
        async with aclosing(chunks):
            async for chunk in chunks:
                yield SseEvent.of(chunk)
        if guard.saw_done:
            guard.accept_sentinel()
            yield SseEvent.done()


__all__ = ["ChatBackendLlmProvider"]
