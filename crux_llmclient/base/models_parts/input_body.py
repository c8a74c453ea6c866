"""
InputBody DTO describing the chat-completion request payload.

The body carries the standard fields (model, messages, stream, temperature)
plus ``additional_fields``: provider-specific keys merged on top of the
serialized object, where they override colliding standard keys. Typical uses
are JSON-mode switches (``response_format``) or provider tuning parameters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .message import Message


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class InputBody:
    """Normalized chat request body.

    Attributes:
        model: Model identifier, or ``None`` to let the endpoint choose.
        messages: Ordered conversation messages.
        stream: Whether a streamed response is requested.
        temperature: Sampling temperature, or ``None`` for the provider default.
        additional_fields: Extra top-level keys; override standard keys on merge.
    """

    model: Optional[str]
    messages: Tuple[Message, ...]
    stream: bool = False
    temperature: Optional[float] = None
    additional_fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages))
        object.__setattr__(self, "additional_fields", _freeze(self.additional_fields))

    @classmethod
    def chat(
        cls,
        model: Optional[str],
        messages: Iterable[Message],
        stream: bool,
        temperature: Optional[float] = None,
        additional_fields: Optional[Mapping[str, Any]] = None,
    ) -> "InputBody":
        """Create a chat completion body."""
        return cls(model, tuple(messages), stream, temperature, additional_fields or {})

    @classmethod
    def sse(cls, model: Optional[str], messages: Iterable[Message], temperature: Optional[float] = None) -> "InputBody":
        """Create a body for SSE streaming (always ``stream=True``)."""
        return cls(model, tuple(messages), True, temperature, {})

    @classmethod
    def chat_message(
        cls,
        content: str,
        stream: bool,
        additional_fields: Optional[Mapping[str, Any]] = None,
    ) -> "InputBody":
        """Create a body holding a single user message."""
        return cls(None, (Message.user(content),), stream, None, additional_fields or {})

    def to_json_object(self) -> Dict[str, Any]:
        """Return the JSON-ready request object.

        ``model`` and ``temperature`` are omitted when ``None``; additional
        fields are merged last and win on key collisions.
        """
        obj: Dict[str, Any] = {
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
        }
        if self.model is not None:
            obj["model"] = self.model
        if self.temperature is not None:
            obj["temperature"] = self.temperature
        obj.update(self.additional_fields)
        return obj


__all__ = ["InputBody"]
