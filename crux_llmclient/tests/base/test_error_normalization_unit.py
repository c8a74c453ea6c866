"""Unit tests for error-code extraction and error normalization."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from crux_llmclient.base.errors import (
    ClientError,
    ChunkDecodeError,
    ErrorType,
    PreflightRejection,
    RateLimitSignal,
    error_from_exception,
    error_from_response,
    error_from_status,
    extract_error_code,
    unauthorized_error,
)
from crux_llmclient.base.models import Output


@pytest.mark.parametrize(
    "body, expected",
    [
        ('{"code":"invalid_api_key"}', "invalid_api_key"),
        ('{"error":{"code":"context_length_exceeded","type":"invalid_request_error"}}', "context_length_exceeded"),
        ('{"error":{"type":"overloaded_error"}}', "overloaded_error"),
        ('{"code":42}', None),
        ('{"error":"plain"}', None),
        ('"Internal Server Error"', None),
        ("Internal Server Error", None),
        ("[1,2]", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_error_code_shapes(body, expected):
    assert extract_error_code(body) == expected  # nosec B101


def test_error_from_response_prefers_provider_code():
    assert error_from_response(400, "bad", "invalid_request") == ClientError("bad", "ApiError", "invalid_request")  # nosec B101
    assert error_from_response(502, "gw", None).code == "HTTP_502"  # nosec B101


def test_error_from_status_preclassifies_rate_limit():
    err = error_from_status(429, '{"error":{"code":"rate_limit_exceeded"}}')
    assert err.type == ErrorType.RATE_LIMIT.value and err.code == "rate_limit_exceeded"  # nosec B101
    assert error_from_status(429, "slow down").code == "HTTP_429"  # nosec B101
    assert error_from_status(500, '"Internal Server Error"').code == "HTTP_500"  # nosec B101


def test_preflight_rejection_passthrough():
    custom = ClientError("quota exhausted", "QuotaError", "QUOTA")
    assert error_from_exception(PreflightRejection(Output.for_error(custom, 402))) == custom  # nosec B101


def test_preflight_rejection_requires_error_output():
    with pytest.raises(ValueError):
        PreflightRejection(Output.for_success_verification())


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ReadTimeout("slow"),
        httpx.ConnectTimeout("slow connect"),
        TimeoutError("t"),
        asyncio.TimeoutError(),
    ],
)
def test_timeouts_map_to_504(exc):
    err = error_from_exception(exc)
    assert err.type == "TimeoutError" and err.code == "HTTP_504"  # nosec B101


@pytest.mark.parametrize(
    "exc",
    [httpx.ConnectError("refused"), httpx.ReadError("reset"), ConnectionResetError("reset")],
)
def test_connection_faults_map_to_503(exc):
    err = error_from_exception(exc)
    assert err.type == "ConnectionError" and err.code == "HTTP_503" and err.cause is exc  # nosec B101


def test_throttling_maps_to_429():
    assert error_from_exception(RateLimitSignal()).code == "HTTP_429"  # nosec B101

    class _SdkRateLimit(Exception):
        status_code = 429

    err = error_from_exception(_SdkRateLimit("too many"))
    assert err.type == ErrorType.RATE_LIMIT.value and err.message == "too many"  # nosec B101


def test_http_status_error_with_429_response():
    request = httpx.Request("POST", "http://x")
    response = httpx.Response(429, request=request)
    exc = httpx.HTTPStatusError("429", request=request, response=response)
    assert error_from_exception(exc).code == "HTTP_429"  # nosec B101


def test_unclassified_exception_keeps_class_name():
    err = error_from_exception(KeyError())
    assert err == ClientError("KeyError", "KeyError", "INTERNAL_ERROR")  # nosec B101
    decode = error_from_exception(ChunkDecodeError("invalid chunk JSON"))
    assert decode.type == "ChunkDecodeError" and decode.message == "invalid chunk JSON"  # nosec B101


def test_classification_is_deterministic():
    exc = ValueError("same")
    assert error_from_exception(exc) == error_from_exception(exc)  # nosec B101


def test_unauthorized_error_shape():
    err = unauthorized_error()
    assert (err.message, err.type, err.code) == ("Unauthorized access", "AuthenticationError", "HTTP_401")  # nosec B101
    assert err.http_status() == 401  # nosec B101
