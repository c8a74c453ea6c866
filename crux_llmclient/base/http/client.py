"""Async HTTP client construction for the native transport.

Purpose:
    Build ``httpx.AsyncClient`` instances configured from the merged
    :class:`ClientConfig` and :func:`get_timeout_config`, so no provider
    hard-codes base URLs, credentials, pool limits or timeout literals.

External dependencies:
    - ``httpx`` for the asynchronous HTTP client.

Lifecycle:
    - Async clients are bound to the event loop that first uses them, so no
      process-wide pool is kept. The provider that calls
      :func:`build_async_client` owns the result and closes it with
      ``aclose()``; injected clients remain owned by the caller.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from ...config import ClientConfig, get_client_config
from ..timeouts import get_timeout_config


def _default_headers(config: ClientConfig) -> Dict[str, str]:
    headers = dict(config.headers)
    if config.api_key:
        headers.setdefault("Authorization", f"Bearer {config.api_key}")
    return headers


def build_async_client(
    config: Optional[ClientConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` for the given configuration.

    Parameters:
        config: Client configuration; ``None`` loads :func:`get_client_config`.
        transport: Optional transport override (e.g. ``httpx.MockTransport``).

    Returns:
        A client the caller owns and must close.
    """
    cfg = config or get_client_config()
    limits = httpx.Limits(
        max_connections=cfg.max_connections,
        max_keepalive_connections=cfg.max_keepalive_connections,
    )
    kwargs = {
        "timeout": get_timeout_config().to_httpx_timeout(),
        "limits": limits,
        "headers": _default_headers(cfg),
    }
    if cfg.base_url:
        kwargs["base_url"] = cfg.base_url
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


__all__ = ["build_async_client"]
