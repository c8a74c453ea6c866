"""
Stream chunk decode error.

Raised when a wire line cannot be parsed into an `OutputChunk`. Providers
treat it as an unrecoverable stream fault and terminate with an error unit.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ChunkDecodeError(Exception):
    """A streamed line was not valid chunk JSON.

    Attributes:
        message: Short description of the decode failure.
        line: Offending raw payload (may be truncated by callers for logging).
        raw: Underlying parser exception, when available.
    """

    message: str
    line: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


__all__ = ["ChunkDecodeError"]
