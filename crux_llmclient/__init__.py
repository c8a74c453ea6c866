"""crux_llmclient: async LLM client protocol layer.

Public entry points:

- ``LlmClient``: preflight verification gate over a transport provider.
- ``HttpxLlmProvider`` / ``ChatBackendLlmProvider``: transport variants.
- Value model (``Message``, ``InputBody``, ``Input``, ``Output``,
  ``OutputChunk``, ``SseEvent``, ``ResponseMode``) and ``ClientError``.
- ``get_json_response_params`` and ``StructuredOutputConverter``: JSON-mode
  request fields and typed parsing of replies.
"""

from .base.cancellation import CancellationToken
from .base.errors import ClientError, ConfigurationError, ErrorType, PreflightRejection, StructuredOutputError
from .base.json_format import get_json_response_params
from .base.models import Input, InputBody, Message, Output, OutputChunk, ResponseMode, SseEvent
from .base.streaming import StreamController, accumulate_chunks
from .base.structured_output import StructuredOutputConverter
from .chat_backend import ChatBackendLlmProvider
from .client import LlmClient
from .httpx_provider import HttpxLlmProvider

__version__ = "0.1.0"

__all__ = [
    "LlmClient",
    "HttpxLlmProvider",
    "ChatBackendLlmProvider",
    "StreamController",
    "accumulate_chunks",
    "StructuredOutputConverter",
    "StructuredOutputError",
    "get_json_response_params",
    "CancellationToken",
    "ClientError",
    "ConfigurationError",
    "ErrorType",
    "PreflightRejection",
    "Message",
    "InputBody",
    "Input",
    "Output",
    "OutputChunk",
    "SseEvent",
    "ResponseMode",
    "__version__",
]
