"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_llmclient.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    IMPLIED_STATUS,
    ChunkDecodeError,
    ClientError,
    ConfigurationError,
    ErrorType,
    PreflightRejection,
    RateLimitSignal,
    StructuredOutputError,
    error_from_exception,
    error_from_response,
    error_from_status,
    extract_error_code,
    http_code,
    internal_error,
    require,
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
