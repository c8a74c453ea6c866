"""Preflight decision values.

Verification is modeled as an explicit decision rather than exception-driven
control flow. ``evaluate_verification`` folds the verification producer's
result into one of:

``Proceed(input_producer)``
    Verification passed; the gate may build the request with ``input_producer``.
``Reject(output)``
    Verification failed; ``output`` is error-shaped and is delivered to the
    caller as the result (or as the single terminal stream unit).

Producers can still raise ``PreflightRejection`` for convenience; the gate
converts that exception into ``Reject`` at its boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from .errors import ClientError, ConfigurationError, PreflightRejection, error_from_exception
from .models import Input, Output

InputProducer = Callable[[], Input]
VerificationProducer = Callable[[], Output]


@dataclass(frozen=True)
class Proceed:
    """Verification passed; build the request with ``input_producer``."""

    input_producer: InputProducer


@dataclass(frozen=True)
class Reject:
    """Verification failed; ``output`` carries the error to deliver."""

    output: Output

    @property
    def error(self) -> ClientError:
        return self.output.error  # type: ignore[return-value]


PreflightDecision = Union[Proceed, Reject]


def evaluate_verification(verification: Optional[Output], input_producer: InputProducer) -> PreflightDecision:
    """Turn a verification ``Output`` into a decision.

    Raises:
        ConfigurationError: If ``verification`` is ``None``.
    """
    if verification is None:
        raise ConfigurationError("verification producer returned None")
    if verification.is_successful():
        return Proceed(input_producer)
    return Reject(verification)


def reject_from_exception(exc: BaseException) -> Reject:
    """Convert a producer failure into ``Reject``.

    A ``PreflightRejection`` keeps its prepared output unchanged; any other
    exception is normalized into an error output.
    """
    if isinstance(exc, PreflightRejection):
        return Reject(exc.output)
    return Reject(Output.for_error(error_from_exception(exc)))


__all__ = [
    "Proceed",
    "Reject",
    "PreflightDecision",
    "InputProducer",
    "VerificationProducer",
    "evaluate_verification",
    "reject_from_exception",
]
