"""ChatBackend Protocol (single-class module).

Contract for higher-level chat services (SDK clients, in-process models) that
work in terms of messages and text rather than raw HTTP bodies.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, Sequence, runtime_checkable

from ..models import Message
from .chat_options import ChatOptions


@runtime_checkable
class ChatBackend(Protocol):
    """Minimal chat service used by ``ChatBackendLlmProvider``.

    Implementations may raise any exception; the provider normalizes it.
    """

    async def complete(self, messages: Sequence[Message], options: ChatOptions) -> str:
        """Return the full assistant reply text."""
        ...

    def stream(self, messages: Sequence[Message], options: ChatOptions) -> AsyncIterator[str]:
        """Yield assistant reply fragments in order."""
        ...
