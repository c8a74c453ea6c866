"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_llmclient.base.errors` for the stable surface.
"""

from .error_type import ErrorType, IMPLIED_STATUS
from .client_error import ClientError
from .configuration_error import ConfigurationError, require
from .preflight_rejection import PreflightRejection
from .chunk_decode_error import ChunkDecodeError
from .rate_limit_signal import RateLimitSignal
from .structured_output_error import StructuredOutputError
from .classification import (
    error_from_exception,
    error_from_response,
    error_from_status,
    extract_error_code,
    http_code,
    internal_error,
    unauthorized_error,
)

__all__ = [
    "ErrorType",
    "IMPLIED_STATUS",
    "ClientError",
    "ConfigurationError",
    "require",
    "PreflightRejection",
    "ChunkDecodeError",
    "RateLimitSignal",
    "StructuredOutputError",
    "error_from_exception",
    "error_from_response",
    "error_from_status",
    "extract_error_code",
    "http_code",
    "internal_error",
    "unauthorized_error",
]
