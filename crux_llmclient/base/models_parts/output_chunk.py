"""
OutputChunk DTO representing one streamed unit.

Wire shape: ``{"message": {"role", "content"}, "done": bool, "index": int,
"error"?: {...}}``. Within a stream at most one chunk has ``done=True`` and
nothing follows it. An error chunk ends the stream only when it is also
``done``; synthesized error chunks always are.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..errors_parts.chunk_decode_error import ChunkDecodeError
from ..errors_parts.client_error import ClientError
from ..json_codec import DEFAULT_CODEC, JsonCodec
from .message import Message


@dataclass(frozen=True)
class OutputChunk:
    """A single stream unit.

    Attributes:
        message: Message fragment (assistant role for provider output).
        done: True on the terminal unit.
        index: Wire position reported by the provider (``-1`` when synthesized
            outside a stream).
        error: Normalized error for terminal error units.
    """

    message: Message
    done: bool = False
    index: int = 0
    error: Optional[ClientError] = None

    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OutputChunk":
        """Build a chunk from a decoded wire object.

        Raises:
            ChunkDecodeError: On a non-object, a malformed message or a
                non-boolean ``done``.
        """
        if not isinstance(data, Mapping):
            raise ChunkDecodeError(f"chunk must be a JSON object, got {type(data).__name__}")
        try:
            message = Message.from_dict(data.get("message") or {"role": "assistant", "content": ""})
            index = int(data.get("index") or 0)
        except (TypeError, ValueError) as e:
            raise ChunkDecodeError(f"malformed chunk: {e}", raw=e) from e
        done = data.get("done", False)
        if not isinstance(done, bool):
            raise ChunkDecodeError(f"chunk \"done\" must be a boolean, got {type(done).__name__}")
        raw_error = data.get("error")
        error = ClientError.from_dict(raw_error) if isinstance(raw_error, Mapping) else None
        return cls(message=message, done=done, index=index, error=error)

    @classmethod
    def from_json(cls, text: str, codec: JsonCodec = DEFAULT_CODEC) -> "OutputChunk":
        """Parse one NDJSON line or SSE data payload.

        Raises:
            ChunkDecodeError: If the text is not valid chunk JSON.
        """
        try:
            data = codec.loads(text)
        except ValueError as e:
            raise ChunkDecodeError(f"invalid chunk JSON: {e}", line=text, raw=e) from e
        return cls.from_dict(data)

    @classmethod
    def for_error(cls, error: ClientError, index: int = -1) -> "OutputChunk":
        """Create a terminal error chunk whose message mirrors the error text."""
        return cls(message=Message.assistant(error.message), done=True, index=index, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"message": self.message.to_dict(), "done": self.done, "index": self.index}
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


__all__ = ["OutputChunk"]
