"""Stateless JSON codec shared by the client layer.

Purpose:
    Provide one injectable encode/decode capability used for request bodies,
    stream chunks and error-body inspection. The codec holds no mutable state,
    so a single instance (``DEFAULT_CODEC``) is safe for unsynchronized use by
    any number of concurrent calls.

External dependencies:
    Standard library ``json`` only.

Failure semantics:
    ``loads`` propagates ``json.JSONDecodeError``; callers decide whether a
    decode failure is fatal (stream chunks) or ignorable (error-code lookup).
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


def _encode_default(obj: Any) -> Any:
    """Fallback encoder for value objects exposing ``to_dict`` and mapping proxies."""
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, MappingProxyType):
        return dict(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclass(frozen=True)
class JsonCodec:
    """Compact JSON encoder/decoder.

    Attributes:
        ensure_ascii: Forwarded to ``json.dumps``; ``False`` keeps non-ASCII
            message content readable on the wire.
    """

    ensure_ascii: bool = False

    def dumps(self, obj: Any) -> str:
        """Serialize ``obj`` to a compact JSON string."""
        return json.dumps(
            obj,
            ensure_ascii=self.ensure_ascii,
            separators=(",", ":"),
            default=_encode_default,
        )

    def loads(self, text: str | bytes) -> Any:
        """Parse a JSON document."""
        return json.loads(text)


DEFAULT_CODEC = JsonCodec()


__all__ = ["JsonCodec", "DEFAULT_CODEC"]
