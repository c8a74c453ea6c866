"""
Response mode selector used by the preflight gate.
"""
from __future__ import annotations

from enum import Enum


class ResponseMode(str, Enum):
    """Which transport operation a gated call dispatches to."""

    SINGLE = "single"
    NDJSON = "ndjson"
    SSE = "sse"


__all__ = ["ResponseMode"]
