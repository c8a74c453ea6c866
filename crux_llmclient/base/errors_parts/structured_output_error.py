"""
Structured output conversion error.

Raised by `StructuredOutputConverter.convert` when model text contains no
JSON document or the document does not validate against the target type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class StructuredOutputError(Exception):
    """Model output could not be converted into the requested type.

    Attributes:
        message: Short description including the target type name.
        text: The raw model output that failed conversion.
        raw: Underlying parser or validation exception, when available.
    """

    message: str
    text: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


__all__ = ["StructuredOutputError"]
