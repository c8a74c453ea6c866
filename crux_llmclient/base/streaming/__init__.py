"""Streaming package for the client layer.

Exposes the termination state machine, wire framing helpers, the cancellable
stream controller and chunk accumulation under one namespace.
"""

from .accumulate import accumulate_chunks
from .framing import SseLineDecoder, decode_ndjson_line
from .stream_controller import StreamController
from .termination import StreamState, TerminationGuard

__all__ = [
    "StreamState",
    "TerminationGuard",
    "decode_ndjson_line",
    "SseLineDecoder",
    "StreamController",
    "accumulate_chunks",
]
