"""Cooperative cancellation primitives (public API facade).

Implementations live under ``cancellation_parts``; import from here.

- ``CancellationToken`` lets a caller stop a stream from any thread or task.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
