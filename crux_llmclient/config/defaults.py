"""Centralized client defaults.

Numeric and string defaults used when neither a config file, environment
variables nor explicit overrides supply a value.
"""
from __future__ import annotations

# Worker threads reserved for blocking producers (verification, input building)
DEFAULT_BLOCKING_WORKERS = 8

# Base URL applied to relative ``Input.url`` values; ``None`` requires absolute URLs
DEFAULT_BASE_URL = None

# Default model placed into bodies built by helpers when callers pass none
DEFAULT_MODEL = None

# Connection pool limits for the owned httpx client
DEFAULT_MAX_CONNECTIONS = 100
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 20

# Environment variable names
CONFIG_FILE_ENV = "LLMCLIENT_CONFIG_FILE"
ENV_PREFIX = "LLMCLIENT_"

__all__ = [
    "DEFAULT_BLOCKING_WORKERS",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_MAX_CONNECTIONS",
    "DEFAULT_MAX_KEEPALIVE_CONNECTIONS",
    "CONFIG_FILE_ENV",
    "ENV_PREFIX",
]
