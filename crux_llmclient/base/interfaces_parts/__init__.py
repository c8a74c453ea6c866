"""Single-class Protocol modules behind ``crux_llmclient.base.interfaces``."""

from .chat_backend import ChatBackend
from .chat_options import ChatOptions
from .llm_client_provider import LlmClientProvider

__all__ = ["LlmClientProvider", "ChatBackend", "ChatOptions"]
