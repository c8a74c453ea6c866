"""Unit tests for the stream termination state machine."""
from __future__ import annotations

import pytest

from crux_llmclient.base.errors import ClientError
from crux_llmclient.base.models import Message, OutputChunk
from crux_llmclient.base.streaming import StreamState, TerminationGuard

ERR = ClientError("boom", "ConnectionError", "HTTP_503")


def _chunk(index: int, done: bool = False) -> OutputChunk:
    return OutputChunk(Message.assistant(f"c{index}"), done, index)


def test_done_chunk_terminates_ndjson_stream():
    guard = TerminationGuard()
    guard.accept(_chunk(0))
    assert not guard.terminal  # nosec B101
    guard.accept(_chunk(1, done=True))
    assert guard.state is StreamState.DONE and guard.emitted == 2  # nosec B101
    with pytest.raises(RuntimeError):
        guard.accept(_chunk(2))


def test_fail_reuses_last_index():
    guard = TerminationGuard()
    guard.accept(_chunk(0))
    guard.accept(_chunk(4))
    chunk = guard.fail(ERR)
    assert chunk.index == 4 and chunk.done and chunk.error == ERR  # nosec B101
    assert guard.state is StreamState.ERROR  # nosec B101


def test_fail_before_any_chunk_uses_minus_one():
    assert TerminationGuard().fail(ERR).index == -1  # nosec B101


def test_wire_error_chunk_is_terminal():
    guard = TerminationGuard()
    guard.accept(OutputChunk.for_error(ERR, index=0))
    assert guard.state is StreamState.ERROR  # nosec B101


def test_sentinel_mode_waits_for_done_sentinel():
    guard = TerminationGuard(sentinel_terminated=True)
    guard.accept(_chunk(0, done=True))
    assert guard.saw_done and not guard.terminal  # nosec B101
    guard.accept_sentinel()
    assert guard.state is StreamState.DONE  # nosec B101
    with pytest.raises(RuntimeError):
        guard.accept_sentinel()


def test_truncated_builds_internal_error():
    guard = TerminationGuard()
    guard.accept(_chunk(2))
    chunk = guard.truncated()
    assert chunk.error.type == "InternalError" and chunk.error.code == "INTERNAL_ERROR"  # nosec B101
    assert chunk.error.message == "stream ended before terminal chunk" and chunk.index == 2  # nosec B101


def test_wire_error_chunk_without_done_is_not_terminal():
    guard = TerminationGuard()
    guard.accept(OutputChunk(Message.assistant("partial"), False, 1, ERR))
    assert not guard.terminal  # nosec B101
    guard.accept(_chunk(2, done=True))
    assert guard.state is StreamState.DONE and guard.last_index == 2  # nosec B101


def test_done_error_chunk_ends_sentinel_stream():
    guard = TerminationGuard(sentinel_terminated=True)
    guard.accept(OutputChunk(Message.assistant(""), True, 0, ERR))
    assert guard.state is StreamState.ERROR  # nosec B101
