"""
Provider throttling signal.

Backends that detect throttling outside an HTTP status (SDK-specific headers,
quota payloads) raise `RateLimitSignal` so the normalizer classifies the
failure as ``RateLimitError`` / ``HTTP_429``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RateLimitSignal(Exception):
    """Raised to report provider throttling.

    Attributes:
        message: Provider message describing the limit.
        retry_after: Optional seconds hint supplied by the provider.
    """

    message: str = "rate limit exceeded"
    retry_after: Optional[float] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


__all__ = ["RateLimitSignal"]
