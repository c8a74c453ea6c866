"""Chat-oriented backend transport and its OpenAI SDK backend."""

from .client import ChatBackendLlmProvider
from .openai_backend import OpenAIChatBackend

__all__ = ["ChatBackendLlmProvider", "OpenAIChatBackend"]
