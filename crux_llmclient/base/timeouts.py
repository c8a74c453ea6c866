"""Timeout configuration for the HTTP transport.

This module centralizes the timeout values applied to every outbound
exchange so providers never hard-code numeric timeouts.

Key Components
--------------
TimeoutConfig
    Frozen dataclass of per-phase timeouts in seconds. ``read_seconds`` is
    the idle gap tolerated between two streamed lines; ``None`` disables it.

get_timeout_config()
    Process-cached configuration parsed from the environment on first use
    (and re-parsed only if the relevant variables change). Supported variables
    (all optional, positive floats):
        LLMCLIENT_TIMEOUT_CONNECT_SECONDS
        LLMCLIENT_TIMEOUT_READ_SECONDS
        LLMCLIENT_TIMEOUT_WRITE_SECONDS
        LLMCLIENT_TIMEOUT_POOL_SECONDS

Failure Modes
-------------
Invalid or non-positive values fall back to the defaults. Expired timeouts
surface as ``httpx.TimeoutException`` and are normalized to
``TimeoutError`` / ``HTTP_504`` by the error normalizer.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

_ENV_NAMES = (
    "LLMCLIENT_TIMEOUT_CONNECT_SECONDS",
    "LLMCLIENT_TIMEOUT_READ_SECONDS",
    "LLMCLIENT_TIMEOUT_WRITE_SECONDS",
    "LLMCLIENT_TIMEOUT_POOL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_seconds: Establishing the TCP/TLS connection.
        read_seconds: Waiting for response bytes (per read, so also the idle
            gap between stream lines). ``None`` waits indefinitely.
        write_seconds: Sending the request body.
        pool_seconds: Acquiring a connection from the pool.
    """

    connect_seconds: float = 10.0
    read_seconds: Optional[float] = 60.0
    write_seconds: float = 30.0
    pool_seconds: float = 10.0

    def to_httpx_timeout(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            connect=self.connect_seconds,
            read=self.read_seconds,
            write=self.write_seconds,
            pool=self.pool_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read a positive float from the environment, else return ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed on env changes."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_seconds=float(_parse_env_float(_ENV_NAMES[0], defaults.connect_seconds)),
        read_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_seconds),
        write_seconds=float(_parse_env_float(_ENV_NAMES[2], defaults.write_seconds)),
        pool_seconds=float(_parse_env_float(_ENV_NAMES[3], defaults.pool_seconds)),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
