"""Isolated unit tests for `StreamController` lifecycle semantics.

Covers:
- Normal completion sets `finished` and captures the terminal unit.
- Cooperative cancellation during iteration stops without a terminal unit.
- Error terminal units surface through `.error`.
- SSE streams finish on the sentinel, not on a `done` chunk.
- `aclose()` releases the underlying generator.
"""
from __future__ import annotations

from typing import AsyncIterator, List

import pytest

from crux_llmclient.base.cancellation import CancellationToken
from crux_llmclient.base.errors import ClientError
from crux_llmclient.base.models import Message, OutputChunk, SseEvent
from crux_llmclient.base.streaming import StreamController, accumulate_chunks


class _FakeSource:
    """Yields chunks, honoring the injected token between units."""

    def __init__(self, contents: List[str], *, fail_after: int | None = None) -> None:
        self.contents = contents
        self.fail_after = fail_after
        self.closed = False

    async def run(self, token: CancellationToken) -> AsyncIterator[OutputChunk]:
        try:
            for i, text in enumerate(self.contents):
                if token.cancelled:
                    return
                if self.fail_after is not None and i > self.fail_after:
                    yield OutputChunk.for_error(ClientError("lost", "ConnectionError", "HTTP_503"), index=i - 1)
                    return
                yield OutputChunk(Message.assistant(text), False, i)
            yield OutputChunk(Message.assistant(""), True, len(self.contents))
        finally:
            self.closed = True


@pytest.mark.asyncio
async def test_completion_captures_terminal_unit():
    source = _FakeSource(["a", "b"])
    controller = StreamController(source.run)
    units = [u async for u in controller]
    assert len(units) == 3 and controller.finished and controller.error is None  # nosec B101
    assert controller.terminal_unit.done and accumulate_chunks(units).message.content == "ab"  # nosec B101


@pytest.mark.asyncio
async def test_cancel_mid_stream_stops_without_terminal_unit():
    source = _FakeSource(["a", "b", "c", "d"])
    controller = StreamController(source.run)
    seen = []
    async for unit in controller:
        seen.append(unit)
        if len(seen) == 2:
            controller.cancel("enough")
    assert [u.message.content for u in seen] == ["a", "b"]  # nosec B101
    assert not controller.finished and controller.token.reason == "enough" and source.closed  # nosec B101


@pytest.mark.asyncio
async def test_error_terminal_unit_exposed():
    controller = StreamController(_FakeSource(["a", "b", "c"], fail_after=0).run)
    units = [u async for u in controller]
    assert units[-1].is_error() and controller.error.code == "HTTP_503"  # nosec B101
    assert accumulate_chunks(units).error.code == "HTTP_503"  # nosec B101


@pytest.mark.asyncio
async def test_sse_controller_finishes_on_sentinel():
    async def _sse(_token: CancellationToken) -> AsyncIterator[SseEvent]:
        yield SseEvent.of(OutputChunk(Message.assistant("x"), False, 0))
        yield SseEvent.of(OutputChunk(Message.assistant(""), True, 1))
        yield SseEvent.done()

    controller = StreamController(_sse)
    units = [u async for u in controller]
    assert len(units) == 3 and controller.terminal_unit.is_done()  # nosec B101
    assert accumulate_chunks(units).message.content == "x"  # nosec B101


@pytest.mark.asyncio
async def test_aclose_releases_source_and_cancel_is_idempotent():
    source = _FakeSource(["a", "b"])
    async with StreamController(source.run) as controller:
        first = await controller.__anext__()
        assert first.message.content == "a"  # nosec B101
    assert source.closed  # nosec B101
    controller.cancel()
    controller.cancel("again")
    with pytest.raises(StopAsyncIteration):
        await controller.__anext__()


def test_accumulate_empty_sequence():
    assert accumulate_chunks([]).message == Message.assistant("")  # nosec B101
