"""Native HTTP transport built on ``httpx.AsyncClient``."""

from .client import HttpxLlmProvider

__all__ = ["HttpxLlmProvider"]
