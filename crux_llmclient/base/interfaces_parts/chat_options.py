"""ChatOptions DTO passed to chat-oriented backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..models import InputBody


@dataclass(frozen=True)
class ChatOptions:
    """Per-call generation options derived from an ``InputBody``."""

    model: Optional[str] = None
    temperature: Optional[float] = None

    @classmethod
    def from_input_body(cls, body: Optional[InputBody]) -> "ChatOptions":
        if body is None:
            return cls()
        return cls(model=body.model, temperature=body.temperature)

    def to_kwargs(self) -> Mapping[str, Any]:
        """Return only the options that are set."""
        return {k: v for k, v in (("model", self.model), ("temperature", self.temperature)) if v is not None}


__all__ = ["ChatOptions"]
