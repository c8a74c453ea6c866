"""Helper implementations for the httpx-based provider.

Each public ``*_impl`` function implements one transport operation for an
``HttpxLlmProvider``. They never raise for transport, provider or decode
failures: ``send_impl`` returns an error ``Output`` and the stream
implementations end with a single terminal error unit.

Streams are async generators around ``httpx.AsyncClient.stream``. Leaving the
generator early (consumer ``break``, ``aclose()``, task cancellation or a
cancelled ``CancellationToken``) exits the ``async with`` block, which closes
the response and returns the connection to the pool.
"""

from __future__ import annotations

import time
from typing import AsyncIterator, Dict, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.constants import JSON_CONTENT_TYPE, NDJSON_CONTENT_TYPE, SSE_CONTENT_TYPE
from ..base.errors import ChunkDecodeError, error_from_exception, error_from_status
from ..base.logging import LogContext, normalized_log_event
from ..base.models import Input, Output, OutputChunk, ResponseMode, SseEvent
from ..base.streaming import SseLineDecoder, StreamState, TerminationGuard, decode_ndjson_line

_MAX_LOGGED_LINE = 200


def build_headers(input: Input, accept: Optional[str] = None) -> Dict[str, str]:
    """Return request headers with content negotiation defaults applied.

    Caller-supplied headers win; ``Content-Type`` defaults to JSON and
    ``Accept`` is set for streaming modes.
    """
    headers = input.header_dict()
    lowered = {k.lower() for k in headers}
    if "content-type" not in lowered:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    if accept and "accept" not in lowered:
        headers["Accept"] = accept
    return headers


def build_context(input: Input, mode: ResponseMode) -> LogContext:
    model = input.input_body.model if input.input_body is not None else None
    return LogContext(url=input.url, model=model, mode=mode.value)


def _elapsed_ms(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000.0


def _cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.cancelled


async def send_impl(provider, input: Input) -> Output:
    """POST ``input`` and map the response (or failure) to an ``Output``."""
    ctx = build_context(input, ResponseMode.SINGLE)
    normalized_log_event(provider._logger, "send.start", ctx, phase="start", attempt=1, emitted=None)
    t0 = time.perf_counter()
    try:
        resp = await provider._client.post(input.url, content=input.body, headers=build_headers(input))
    except Exception as e:
        error = error_from_exception(e)
        normalized_log_event(
            provider._logger,
            "send.error",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=False,
            error_code=error.code,
            error_type=error.type,
            latency_ms=_elapsed_ms(t0),
        )
        return Output.for_error(error)

    output = Output.from_response(resp.status_code, dict(resp.headers), resp.text, provider._codec)
    if output.error is not None:
        normalized_log_event(
            provider._logger,
            "send.error",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=False,
            error_code=output.error.code,
            error_type=output.error.type,
            status_code=resp.status_code,
            latency_ms=_elapsed_ms(t0),
        )
    else:
        normalized_log_event(
            provider._logger,
            "send.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            status_code=resp.status_code,
            latency_ms=_elapsed_ms(t0),
        )
    return output


async def _error_body(resp: httpx.Response) -> str:
    await resp.aread()
    return resp.text


def _log_stream_error(provider, ctx: LogContext, guard: TerminationGuard, chunk: OutputChunk, t0: float, **extra) -> None:
    normalized_log_event(
        provider._logger,
        "stream.error",
        ctx,
        phase="finalize",
        attempt=1,
        emitted=guard.emitted,
        error_code=chunk.error.code if chunk.error is not None else None,
        error_type=chunk.error.type if chunk.error is not None else None,
        latency_ms=_elapsed_ms(t0),
        **extra,
    )


def _log_stream_end(provider, ctx: LogContext, guard: TerminationGuard, t0: float, *, cancelled: bool = False) -> None:
    normalized_log_event(
        provider._logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=1,
        emitted=guard.emitted,
        cancelled=cancelled or None,
        latency_ms=_elapsed_ms(t0),
    )


def _log_terminal(provider, ctx: LogContext, guard: TerminationGuard, chunk: Optional[OutputChunk], t0: float) -> None:
    if chunk is not None and guard.state is StreamState.ERROR:
        _log_stream_error(provider, ctx, guard, chunk, t0)
    else:
        _log_stream_end(provider, ctx, guard, t0)


def _log_close_error(provider, ctx: LogContext, guard: TerminationGuard, exc: Exception) -> None:
    """Failures after the terminal unit (or after cancellation) are only logged."""
    normalized_log_event(
        provider._logger,
        "stream.close_error",
        ctx,
        phase="finalize",
        attempt=1,
        emitted=guard.emitted,
        error_code=error_from_exception(exc).code,
        error=str(exc),
    )


def _log_decode_error(provider, ctx: LogContext, exc: ChunkDecodeError) -> None:
    normalized_log_event(
        provider._logger,
        "stream.decode_error",
        ctx,
        phase="mid_stream",
        attempt=1,
        emitted=None,
        error_code="DECODE_ERROR",
        line=(exc.line or "")[:_MAX_LOGGED_LINE],
        error=exc.message,
    )


async def stream_impl(
    provider,
    input: Input,
    cancellation_token: Optional[CancellationToken] = None,
) -> AsyncIterator[OutputChunk]:
    """Yield NDJSON chunks up to and including the first terminal chunk."""
    ctx = build_context(input, ResponseMode.NDJSON)
    guard = TerminationGuard()
    if _cancelled(cancellation_token):
        return
    normalized_log_event(provider._logger, "stream.start", ctx, phase="start", attempt=1, emitted=None)
    t0 = time.perf_counter()
    try:
        async with provider._client.stream(
            "POST",
            input.url,
            content=input.body,
            headers=build_headers(input, NDJSON_CONTENT_TYPE),
        ) as resp:
            if not resp.is_success:
                chunk = guard.fail(error_from_status(resp.status_code, await _error_body(resp), provider._codec))
                _log_stream_error(provider, ctx, guard, chunk, t0, status_code=resp.status_code)
                yield chunk
                return
            async for line in resp.aiter_lines():
                if _cancelled(cancellation_token):
                    _log_stream_end(provider, ctx, guard, t0, cancelled=True)
                    return
                try:
                    chunk = decode_ndjson_line(line, provider._codec)
                except ChunkDecodeError as e:
                    _log_decode_error(provider, ctx, e)
                    chunk = guard.fail(error_from_exception(e))
                    _log_stream_error(provider, ctx, guard, chunk, t0)
                    yield chunk
                    return
                if chunk is None:
                    continue
                yield guard.accept(chunk)
                if guard.terminal:
                    _log_terminal(provider, ctx, guard, chunk, t0)
                    return
    except Exception as e:
        if guard.terminal or _cancelled(cancellation_token):
            _log_close_error(provider, ctx, guard, e)
            return
        chunk = guard.fail(error_from_exception(e))
        _log_stream_error(provider, ctx, guard, chunk, t0)
        yield chunk
        return
    if _cancelled(cancellation_token):
        _log_stream_end(provider, ctx, guard, t0, cancelled=True)
        return
    chunk = guard.truncated()
    _log_stream_error(provider, ctx, guard, chunk, t0)
    yield chunk


async def stream_sse_impl(
    provider,
    input: Input,
    cancellation_token: Optional[CancellationToken] = None,
) -> AsyncIterator[SseEvent]:
    """Yield SSE events up to and including the ``[DONE]`` sentinel."""
    ctx = build_context(input, ResponseMode.SSE)
    guard = TerminationGuard(sentinel_terminated=True)
    decoder = SseLineDecoder(codec=provider._codec)
    if _cancelled(cancellation_token):
        return
    normalized_log_event(provider._logger, "stream.start", ctx, phase="start", attempt=1, emitted=None)
    t0 = time.perf_counter()
    try:
        async with provider._client.stream(
            "POST",
            input.url,
            content=input.body,
            headers=build_headers(input, SSE_CONTENT_TYPE),
        ) as resp:
            if not resp.is_success:
                chunk = guard.fail(error_from_status(resp.status_code, await _error_body(resp), provider._codec))
                _log_stream_error(provider, ctx, guard, chunk, t0, status_code=resp.status_code)
                yield SseEvent.of(chunk)
                return
            async for line in resp.aiter_lines():
                if _cancelled(cancellation_token):
                    _log_stream_end(provider, ctx, guard, t0, cancelled=True)
                    return
                try:
                    event = decoder.feed(line)
                except ChunkDecodeError as e:
                    _log_decode_error(provider, ctx, e)
                    chunk = guard.fail(error_from_exception(e))
                    _log_stream_error(provider, ctx, guard, chunk, t0)
                    yield SseEvent.of(chunk)
                    return
                if event is None:
                    continue
                if event.is_done():
                    guard.accept_sentinel()
                else:
                    guard.accept(event.chunk)  # type: ignore[arg-type]
                yield event
                if guard.terminal:
                    _log_terminal(provider, ctx, guard, event.chunk, t0)
                    return
    except Exception as e:
        if guard.terminal or _cancelled(cancellation_token):
            _log_close_error(provider, ctx, guard, e)
            return
        chunk = guard.fail(error_from_exception(e))
        _log_stream_error(provider, ctx, guard, chunk, t0)
        yield SseEvent.of(chunk)
        return
    if _cancelled(cancellation_token):
        _log_stream_end(provider, ctx, guard, t0, cancelled=True)
        return
    if guard.saw_done:
        # body closed after a done chunk without the sentinel
        guard.accept_sentinel()
        _log_stream_end(provider, ctx, guard, t0)
        yield SseEvent.done()
        return
    chunk = guard.truncated()
    _log_stream_error(provider, ctx, guard, chunk, t0)
    yield SseEvent.of(chunk)


__all__ = ["build_headers", "build_context", "send_impl", "stream_impl", "stream_sse_impl"]
