"""
Preflight rejection exception type.

Producers (verification or input construction) raise `PreflightRejection` to
short-circuit a request with a prepared error-shaped `Output`. The gate and
the providers convert it into the terminal unit carrying exactly that error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models_parts.output import Output


@dataclass
class PreflightRejection(Exception):
    """Signals that a request must not reach the network.

    Attributes:
        output: Error-shaped output describing the rejection. Its ``error`` is
            delivered unchanged to the caller.
    """

    output: "Output"

    def __post_init__(self) -> None:
        if self.output is None or self.output.error is None:
            raise ValueError("PreflightRejection requires an output carrying an error")

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.output.failure_reason() or "preflight rejected"


__all__ = ["PreflightRejection"]
