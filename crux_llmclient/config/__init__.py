"""Unified configuration layer for the client.

Goals
-----
* Centralize defaults (see ``defaults.py``).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``LLMCLIENT_CONFIG_FILE``
    3. Environment variables (``LLMCLIENT_BASE_URL``, ``LLMCLIENT_MODEL``,
       ``LLMCLIENT_API_KEY``, ``LLMCLIENT_BLOCKING_WORKERS``)
    4. In-code overrides passed to ``get_client_config``
* Validate the merged result into a typed :class:`ClientConfig`.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
base_url: https://api.openai.com/v1
model: gpt-4o-mini
headers:
  OpenAI-Organization: org-123
blocking_workers: 4
```

Public API
----------
* get_client_config(overrides: dict | None = None) -> ClientConfig
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field

from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_BLOCKING_WORKERS,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
    DEFAULT_MODEL,
    ENV_PREFIX,
)


class ClientConfig(BaseModel):
    """Validated client configuration.

    Attributes
    ----------
    base_url:
        Base URL for the owned httpx client; relative ``Input.url`` values are
        resolved against it.
    model:
        Default model identifier for helper-built bodies.
    api_key:
        Optional bearer token added as an ``Authorization`` header by the
        owned httpx client.
    headers:
        Static headers sent with every request of the owned client.
    blocking_workers:
        Size of the thread pool used for blocking producers.
    max_connections / max_keepalive_connections:
        Connection pool limits for the owned httpx client.
    """

    base_url: Optional[str] = DEFAULT_BASE_URL
    model: Optional[str] = DEFAULT_MODEL
    api_key: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    blocking_workers: int = Field(default=DEFAULT_BLOCKING_WORKERS, ge=1)
    max_connections: int = Field(default=DEFAULT_MAX_CONNECTIONS, ge=1)
    max_keepalive_connections: int = Field(default=DEFAULT_MAX_KEEPALIVE_CONNECTIONS, ge=0)


ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "blocking_workers": "BLOCKING_WORKERS",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load (and cache per path) the optional JSON/YAML config file."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    _FILE_CACHE_PATH = path
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{ENV_PREFIX}{suffix}")
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def get_client_config(overrides: Optional[Mapping[str, Any]] = None) -> ClientConfig:
    """Return the merged, validated client configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.

    Raises:
        pydantic.ValidationError: If the merged values are invalid.
    """
    cfg: Dict[str, Any] = {}
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return ClientConfig.model_validate(cfg)


def reset_config_cache() -> None:
    """Drop the cached config file contents (useful in tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = [
    "ClientConfig",
    "get_client_config",
    "reset_config_cache",
    "ENV_FIELD_MAP",
]
