"""Cooperative cancellation token.

A caller hands a ``CancellationToken`` to a streaming call and may cancel it
from any thread or task. Providers poll ``cancelled`` between wire lines and
stop pulling from the transport once it flips; registered callbacks let a
controller react immediately (for example by closing a stream iterator).
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List, Optional

from .cancelled_error import CancelledError
from .state import State

_log = logging.getLogger("crux_llmclient.cancellation")


class CancellationToken:
    """Thread-safe, one-shot cancellation signal with cascading children."""

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:
        """Reason supplied at cancel time, if any."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, fire callbacks once and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for cb in callbacks:
            self._fire(cb, reason)
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[Optional[str]], None]) -> None:
        """Register ``callback(reason)``; runs immediately if already cancelled."""
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return
            reason = self._state.reason
        self._fire(callback, reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        """Create and link a child token."""
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    @staticmethod
    def _fire(callback: Callable[[Optional[str]], None], reason: Optional[str]) -> None:
        try:
            callback(reason)
        except Exception:  # a failing observer must not block cancellation
            _log.exception("cancellation callback failed")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
