"""
Error normalization mapping responses and exceptions to `ClientError` values.

Implements provider error-code extraction from JSON error bodies, HTTP status
pre-classification and exception classification by kind. Every function here
is pure: identical inputs yield identical errors.

Recognized error body shapes (checked in order):
    - ``{"code": "..."}``                  generic
    - ``{"error": {"code": "..."}}``       OpenAI style
    - ``{"error": {"type": "..."}}``       Anthropic style
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from ..constants import HTTP_CODE_PREFIX, INTERNAL_ERROR_CODE
from ..json_codec import DEFAULT_CODEC, JsonCodec
from .client_error import ClientError
from .error_type import ErrorType
from .preflight_rejection import PreflightRejection
from .rate_limit_signal import RateLimitSignal

_THROTTLED_STATUS = 429


def http_code(status_code: int) -> str:
    """Return the synthesized ``HTTP_<status>`` code."""
    return f"{HTTP_CODE_PREFIX}{status_code}"


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        try:
            sc = getattr(resp, "status_code", None)
        except Exception:  # httpx raises when a response has no request bound
            sc = None
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def extract_error_code(error_body: Optional[str], codec: JsonCodec = DEFAULT_CODEC) -> Optional[str]:
    """Extract a provider error code from a raw error body.

    Returns ``None`` for empty bodies, non-JSON text, non-object documents and
    documents without a string code in any recognized position.
    """
    if not error_body:
        return None
    try:
        data: Any = codec.loads(error_body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    code = data.get("code")
    if isinstance(code, str):
        return code
    nested = data.get("error")
    if isinstance(nested, dict):
        for key in ("code", "type"):
            code = nested.get(key)
            if isinstance(code, str):
                return code
    return None


def error_from_response(status_code: int, message: Optional[str], provider_code: Optional[str]) -> ClientError:
    """Build an ``ApiError`` for a non-2xx response.

    Parameters:
        status_code: HTTP status of the response.
        message: Raw response body, used verbatim as the error message.
        provider_code: Code extracted from the body, or ``None`` to synthesize
            ``HTTP_<status>``.
    """
    return ClientError(
        message=message or "",
        type=ErrorType.API.value,
        code=provider_code if provider_code is not None else http_code(status_code),
    )


def error_from_status(status_code: int, body: Optional[str], codec: JsonCodec = DEFAULT_CODEC) -> ClientError:
    """Classify a non-2xx response, pre-classifying provider throttling.

    A ``429`` response becomes ``RateLimitError`` (keeping any provider code);
    every other status becomes ``ApiError`` via :func:`error_from_response`.
    """
    provider_code = extract_error_code(body, codec)
    if status_code == _THROTTLED_STATUS:
        return ClientError(
            message=body or "rate limit exceeded",
            type=ErrorType.RATE_LIMIT.value,
            code=provider_code if provider_code is not None else http_code(_THROTTLED_STATUS),
        )
    return error_from_response(status_code, body, provider_code)


def _is_timeout(exc: BaseException) -> bool:
    return isinstance(exc, (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError))


def _is_connection_fault(exc: BaseException) -> bool:
    return isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError, ConnectionError))


def _is_throttled(exc: BaseException) -> bool:
    return isinstance(exc, RateLimitSignal) or _extract_status(exc) == _THROTTLED_STATUS


def _message_of(exc: BaseException) -> str:
    text = str(exc)
    return text if text else type(exc).__name__


def error_from_exception(exc: BaseException) -> ClientError:
    """Classify an exception into a :class:`ClientError`.

    Precedence:
        1. ``PreflightRejection`` passthrough (its output's error).
        2. Timeouts (httpx, builtin, asyncio) -> ``TimeoutError`` / ``HTTP_504``.
        3. Connection faults -> ``ConnectionError`` / ``HTTP_503``.
        4. Throttling -> ``RateLimitError`` / ``HTTP_429``.
        5. Fallback: exception class name with ``INTERNAL_ERROR``.
    """
    if isinstance(exc, PreflightRejection):
        return exc.output.error  # type: ignore[return-value]
    if _is_timeout(exc):
        return ClientError(_message_of(exc), ErrorType.TIMEOUT.value, http_code(504), exc)
    if _is_connection_fault(exc):
        return ClientError(_message_of(exc), ErrorType.CONNECTION.value, http_code(503), exc)
    if _is_throttled(exc):
        return ClientError(_message_of(exc), ErrorType.RATE_LIMIT.value, http_code(_THROTTLED_STATUS), exc)
    return ClientError(_message_of(exc), type(exc).__name__, INTERNAL_ERROR_CODE, exc)


def unauthorized_error() -> ClientError:
    """Return the standard ``AuthenticationError`` used for rejected preflight."""
    return ClientError("Unauthorized access", ErrorType.AUTHENTICATION.value, http_code(401))


def internal_error(message: str) -> ClientError:
    """Return a synthesized ``InternalError`` for failures without an exception."""
    return ClientError(message, ErrorType.INTERNAL.value, INTERNAL_ERROR_CODE)


__all__ = [
    "http_code",
    "extract_error_code",
    "error_from_response",
    "error_from_status",
    "error_from_exception",
    "unauthorized_error",
    "internal_error",
    "_extract_status",
]
