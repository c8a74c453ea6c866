"""
Client value model public surface.

This module re-exports the one-class-per-file implementations under
``crux_llmclient.base.models_parts`` to keep a stable import path.
"""

from .models_parts.message import Message, Role, ROLES
from .models_parts.input_body import InputBody
from .models_parts.client_input import Input
from .models_parts.output import Output
from .models_parts.output_chunk import OutputChunk
from .models_parts.sse_event import SseEvent
from .models_parts.response_mode import ResponseMode

__all__ = [
    "Message",
    "Role",
    "ROLES",
    "InputBody",
    "Input",
    "Output",
    "OutputChunk",
    "SseEvent",
    "ResponseMode",
]
