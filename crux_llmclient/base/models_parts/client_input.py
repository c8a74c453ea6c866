"""
Input DTO representing one fully formed outbound request.

An `Input` pairs the target URL and headers with the canonical serialized
body, keeping the originating `InputBody` for backends that need structured
access (e.g. chat-oriented SDK backends).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from ..json_codec import DEFAULT_CODEC, JsonCodec
from .input_body import InputBody


@dataclass(frozen=True)
class Input:
    """Immutable request description owned by a single call.

    Attributes:
        url: Absolute (or client-base-relative) endpoint URL.
        body: Canonical JSON of ``input_body`` merged with its additional fields.
        headers: Request headers.
        input_body: Structured body the serialized form was derived from.
    """

    url: str
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)
    input_body: Optional[InputBody] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))

    @classmethod
    def chat(
        cls,
        url: str,
        input_body: InputBody,
        headers: Optional[Mapping[str, str]] = None,
        codec: JsonCodec = DEFAULT_CODEC,
    ) -> "Input":
        """Create an input for a chat-completion request."""
        return cls(url, codec.dumps(input_body.to_json_object()), headers or {}, input_body)

    def header_dict(self) -> Dict[str, str]:
        """Return a mutable copy of the headers for the HTTP layer."""
        return dict(self.headers)


__all__ = ["Input"]
