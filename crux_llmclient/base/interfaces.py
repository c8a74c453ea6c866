"""
Transport-agnostic interfaces for the client layer.

Re-exports the Protocols split into single-class modules under
``crux_llmclient.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ChatBackend, ChatOptions, LlmClientProvider

__all__ = ["LlmClientProvider", "ChatBackend", "ChatOptions"]
