"""
SseEvent DTO wrapping one Server-Sent-Events unit.

``data`` is either a parsed `OutputChunk` or the literal ``[DONE]`` sentinel
that closes an SSE stream.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..constants import SSE_DONE_SENTINEL
from .output_chunk import OutputChunk


@dataclass(frozen=True)
class SseEvent:
    """A framed SSE event.

    Attributes:
        data: Parsed chunk, or the ``[DONE]`` sentinel string.
        event: Optional ``event:`` field seen before the data line.
        id: Optional ``id:`` field seen before the data line.
    """

    data: Union[OutputChunk, str]
    event: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def done(cls) -> "SseEvent":
        """Create the terminal sentinel event."""
        return cls(SSE_DONE_SENTINEL)

    @classmethod
    def of(cls, chunk: OutputChunk, *, event: Optional[str] = None, id: Optional[str] = None) -> "SseEvent":
        return cls(chunk, event, id)

    def is_done(self) -> bool:
        """Return True for the ``[DONE]`` sentinel."""
        return isinstance(self.data, str) and self.data == SSE_DONE_SENTINEL

    @property
    def chunk(self) -> Optional[OutputChunk]:
        """The wrapped chunk, or ``None`` for the sentinel."""
        return self.data if isinstance(self.data, OutputChunk) else None

    def is_terminal(self) -> bool:
        """Return True for the sentinel or a ``done`` chunk carrying an error.

        A plain ``done`` chunk is not terminal in SSE framing; the sentinel
        follows it.
        """
        chunk = self.chunk
        return self.is_done() or (chunk is not None and chunk.done and chunk.is_error())

    def to_dict(self) -> Dict[str, Any]:
        payload: Any = self.data if isinstance(self.data, str) else self.data.to_dict()
        out: Dict[str, Any] = {"data": payload}
        if self.event is not None:
            out["event"] = self.event
        if self.id is not None:
            out["id"] = self.id
        return out


__all__ = ["SseEvent"]
