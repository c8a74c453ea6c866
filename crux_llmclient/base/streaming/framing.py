"""Wire framing for NDJSON and SSE response bodies.

Providers feed raw text lines (as produced by ``httpx.Response.aiter_lines``)
into the helpers here and receive decoded units back. Decoding failures raise
``ChunkDecodeError``; the caller turns them into a terminal error unit.

NDJSON
    One JSON ``OutputChunk`` per non-blank line.

SSE
    Every payload line carries a chunk (or the ``[DONE]`` sentinel). A leading
    ``data:`` prefix, with or without a single space after the colon, is
    stripped; lines without it are taken as the payload verbatim. Lines
    starting with ``:`` are comments. ``event:`` and ``id:`` lines are
    remembered and attached to the next payload's event; ``retry:`` lines are
    ignored. Blank lines only separate events.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..json_codec import DEFAULT_CODEC, JsonCodec
from ..models import OutputChunk, SseEvent


def decode_ndjson_line(line: str, codec: JsonCodec = DEFAULT_CODEC) -> Optional[OutputChunk]:
    """Decode one NDJSON line; blank lines yield ``None``.

    Raises:
        ChunkDecodeError: If the line is not a valid chunk.
    """
    text = line.strip()
    if not text:
        return None
    return OutputChunk.from_json(text, codec)


def _field_value(line: str, prefix: str) -> str:
    value = line[len(prefix):]
    return value[1:] if value.startswith(" ") else value


@dataclass
class SseLineDecoder:
    """Stateful decoder for one SSE body.

    Feed each line to :meth:`feed`; it returns an :class:`SseEvent` for payload
    lines and ``None`` for everything else.
    """

    codec: JsonCodec = DEFAULT_CODEC
    pending_event: Optional[str] = None
    pending_id: Optional[str] = None

    def feed(self, line: str) -> Optional[SseEvent]:
        """Consume one line.

        Raises:
            ChunkDecodeError: If a data payload is neither ``[DONE]`` nor a chunk.
        """
        line = line.rstrip("\r\n")
        if not line or line.startswith(":"):
            return None
        if line.startswith(SSE_DATA_PREFIX):
            return self._emit(_field_value(line, SSE_DATA_PREFIX))
        if line.startswith("event:"):
            self.pending_event = _field_value(line, "event:")
            return None
        if line.startswith("id:"):
            self.pending_id = _field_value(line, "id:")
            return None
        if line.startswith("retry:"):
            return None
        return self._emit(line)

    def _emit(self, payload: str) -> SseEvent:
        event, ident = self.pending_event, self.pending_id
        self.pending_event = self.pending_id = None
        if payload.strip() == SSE_DONE_SENTINEL:
            return SseEvent(SSE_DONE_SENTINEL, event, ident)
        return SseEvent.of(OutputChunk.from_json(payload, self.codec), event=event, id=ident)


__all__ = ["decode_ndjson_line", "SseLineDecoder"]
