"""Unit tests for the preflight decision values."""
from __future__ import annotations

import pytest

from crux_llmclient.base.errors import ClientError, ConfigurationError, PreflightRejection
from crux_llmclient.base.models import Input, Output
from crux_llmclient.base.preflight import Proceed, Reject, evaluate_verification, reject_from_exception


def _producer() -> Input:
    return Input("http://x", "{}")


def test_successful_verification_proceeds_with_producer():
    decision = evaluate_verification(Output.for_success_verification(), _producer)
    assert isinstance(decision, Proceed) and decision.input_producer is _producer  # nosec B101


def test_failed_verification_rejects_with_same_output():
    denied = Output.for_error_401()
    decision = evaluate_verification(denied, _producer)
    assert isinstance(decision, Reject) and decision.output is denied  # nosec B101
    assert decision.error.code == "HTTP_401"  # nosec B101


def test_none_verification_is_configuration_error():
    with pytest.raises(ConfigurationError):
        evaluate_verification(None, _producer)


def test_reject_from_preflight_rejection_keeps_output():
    prepared = Output.for_error(ClientError("no budget", "BudgetError", "BUDGET"), 402)
    decision = reject_from_exception(PreflightRejection(prepared))
    assert decision.output is prepared  # nosec B101


def test_reject_from_arbitrary_exception_normalizes():
    decision = reject_from_exception(RuntimeError("vault unavailable"))
    assert decision.error == ClientError("vault unavailable", "RuntimeError", "INTERNAL_ERROR")  # nosec B101
    assert decision.output.status_code == 500  # nosec B101
