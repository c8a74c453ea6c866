"""
Message DTO used across the client layer.

Defines the immutable `Message` dataclass and the `Role` literal. Messages are
built through per-role factories; `from_dict` validates wire input.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Tuple, cast

# Message roles accepted on the wire.
Role = Literal["system", "user", "assistant"]
ROLES: Tuple[str, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """A single chat message.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Plain text content.
    """

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system instruction message."""
        return cls("system", content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user input message."""
        return cls("user", content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant response message."""
        return cls("assistant", content)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        """Parse a ``{"role", "content"}`` mapping.

        Raises:
            ValueError: If the role is unknown or the mapping is malformed.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"message must be an object, got {type(data).__name__}")
        role = data.get("role")
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        content = data.get("content")
        return cls(cast(Role, role), "" if content is None else str(content))

    def to_dict(self) -> Dict[str, str]:
        """Return the wire representation."""
        return {"role": self.role, "content": self.content}


__all__ = ["Message", "Role", "ROLES"]
