"""
Normalized client error type tags (taxonomy).

Defines the `ErrorType` enumeration whose values are used verbatim as the
``type`` tag of :class:`ClientError`. Values are stable public contract; the
HTTP status implied by each category lives alongside in ``IMPLIED_STATUS``.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict


class ErrorType(str, Enum):
    """Enumerated error categories used as ``ClientError.type`` tags."""

    CONFIGURATION = "ConfigurationError"
    AUTHENTICATION = "AuthenticationError"
    RATE_LIMIT = "RateLimitError"
    CONNECTION = "ConnectionError"
    TIMEOUT = "TimeoutError"
    API = "ApiError"
    INTERNAL = "InternalError"


IMPLIED_STATUS: Dict[ErrorType, int] = {
    ErrorType.AUTHENTICATION: 401,
    ErrorType.RATE_LIMIT: 429,
    ErrorType.CONNECTION: 503,
    ErrorType.TIMEOUT: 504,
    ErrorType.INTERNAL: 500,
}


__all__ = ["ErrorType", "IMPLIED_STATUS"]
