"""Provider-specific JSON-mode request fields.

``get_json_response_params(model_name)`` returns the extra top-level request
keys that ask a provider to emit JSON, inferred from the model name. The
result is meant for ``InputBody.additional_fields``::

    body = InputBody.chat(model, messages, False,
                          additional_fields=get_json_response_params(model))

Prompts should still carry schema instructions (see
``StructuredOutputConverter.format_instructions``); these fields only switch
on the provider's JSON mode where one exists.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ProviderFamily(str, Enum):
    """Provider families recognized from model names."""

    OPENAI = "openai"
    AZURE = "azure"
    MISTRAL = "mistral"
    GROQ = "groq"
    OLLAMA = "ollama"
    LLAMA = "llama"
    CLAUDE = "claude"
    COHERE = "cohere"
    GEMINI = "gemini"
    UNKNOWN = "unknown"


# Checked in order; the first family with a matching marker wins.
_MARKERS = (
    (ProviderFamily.OPENAI, ("gpt-", "text-", "openai")),
    (ProviderFamily.AZURE, ("azure",)),
    (ProviderFamily.MISTRAL, ("mistral", "mixtral")),
    (ProviderFamily.GROQ, ("groq",)),
    (ProviderFamily.OLLAMA, ("ollama",)),
    (ProviderFamily.LLAMA, ("llama",)),
    (ProviderFamily.CLAUDE, ("claude",)),
    (ProviderFamily.COHERE, ("cohere",)),
    (ProviderFamily.GEMINI, ("gemini", "vertex")),
)

_JSON_OBJECT_FAMILIES = frozenset(
    {ProviderFamily.OPENAI, ProviderFamily.AZURE, ProviderFamily.MISTRAL, ProviderFamily.GROQ}
)


def identify_provider(model_name: Optional[str]) -> ProviderFamily:
    """Infer the provider family from a model name (case-insensitive)."""
    if not model_name:
        return ProviderFamily.UNKNOWN
    lower = model_name.lower()
    for family, markers in _MARKERS:
        if any(m in lower for m in markers):
            return family
    return ProviderFamily.UNKNOWN


def get_json_response_params(model_name: Optional[str]) -> Dict[str, Any]:
    """Return request fields enabling JSON output for ``model_name``.

    - OpenAI, Azure, Mistral, Groq: ``{"response_format": {"type": "json_object"}}``
    - Ollama: ``{"format": "json"}``
    - Everything else (or ``None``): ``{}``
    """
    family = identify_provider(model_name)
    if family in _JSON_OBJECT_FAMILIES:
        return {"response_format": {"type": "json_object"}}
    if family is ProviderFamily.OLLAMA:
        return {"format": "json"}
    return {}


__all__ = ["ProviderFamily", "identify_provider", "get_json_response_params"]
