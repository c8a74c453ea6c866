"""Cancellation error type.

``CancelledError`` is raised by ``CancellationToken.raise_if_cancelled``.
Stream producers observe it to stop emitting; it is never turned into an
error unit because a cancelled stream ends without a terminal chunk.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a caller requested cooperative cancellation of a call."""


__all__ = ["CancelledError"]
