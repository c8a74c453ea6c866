"""HTTP utilities for the client base layer.

Exposes the async client factory used by the native transport.
"""

from .client import build_async_client

__all__ = ["build_async_client"]
