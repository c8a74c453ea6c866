"""Stream termination protocol.

Every stream produced by this package is a finite sequence of units with
exactly one terminal unit at the end:

* NDJSON: the first chunk with ``done=True`` (inclusive).
* SSE: the ``[DONE]`` sentinel event. A plain ``done`` chunk inside an SSE
  body is passed through; the sentinel follows it.

In both modes a ``done`` chunk carrying an ``error`` ends the stream; error
chunks built by :meth:`TerminationGuard.fail` are always of that shape. A wire
chunk with an ``error`` but ``done=False`` is an ordinary unit.

``TerminationGuard`` is the per-stream state machine providers drive while
emitting. It records the last wire index so a synthesized error chunk never
moves indices backwards, and it refuses any unit after the terminal one.
A cancelled stream simply stops; it has no terminal unit.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from ..constants import STREAM_TRUNCATED_MESSAGE
from ..errors import ClientError, internal_error
from ..models import OutputChunk


class StreamState(str, Enum):
    """Lifecycle state of a single stream."""

    STREAMING = "streaming"
    DONE = "done"
    ERROR = "error"


class TerminationGuard:
    """Track one stream's progress towards its terminal unit.

    Parameters:
        sentinel_terminated: SSE mode. ``done`` chunks are recorded in
            ``saw_done`` but only :meth:`accept_sentinel` completes the stream.

    Attributes:
        state: Current :class:`StreamState`.
        last_index: Index of the last accepted chunk, ``None`` before the first.
        emitted: Number of units accepted so far (sentinel and errors included).
        saw_done: Whether a ``done`` chunk has been accepted.
    """

    def __init__(self, *, sentinel_terminated: bool = False) -> None:
        self.sentinel_terminated = sentinel_terminated
        self.state = StreamState.STREAMING
        self.last_index: Optional[int] = None
        self.emitted = 0
        self.saw_done = False

    @property
    def terminal(self) -> bool:
        """Whether a terminal unit has been produced."""
        return self.state is not StreamState.STREAMING

    def _check_open(self) -> None:
        if self.terminal:
            raise RuntimeError(f"stream already terminated ({self.state.value})")

    def accept(self, chunk: OutputChunk) -> OutputChunk:
        """Record ``chunk`` as emitted and return it.

        Raises:
            RuntimeError: If the stream already produced its terminal unit.
        """
        self._check_open()
        self.emitted += 1
        if chunk.index >= 0:
            self.last_index = chunk.index
        if chunk.done:
            self.saw_done = True
            if chunk.is_error():
                self.state = StreamState.ERROR
            elif not self.sentinel_terminated:
                self.state = StreamState.DONE
        return chunk

    def accept_sentinel(self) -> None:
        """Record the SSE ``[DONE]`` sentinel."""
        self._check_open()
        self.emitted += 1
        self.state = StreamState.DONE

    def fail(self, error: ClientError) -> OutputChunk:
        """Build and record the terminal error chunk for ``error``.

        The chunk reuses the last seen index (``-1`` when nothing was emitted).
        """
        chunk = OutputChunk.for_error(error, index=self.last_index if self.last_index is not None else -1)
        return self.accept(chunk)

    def truncated(self) -> OutputChunk:
        """Terminal chunk for a body that ended without a terminal unit."""
        return self.fail(internal_error(STREAM_TRUNCATED_MESSAGE))


__all__ = ["StreamState", "TerminationGuard"]
