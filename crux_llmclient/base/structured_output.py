"""Typed conversion of model text into pydantic-validated values.

``StructuredOutputConverter(model_type)`` pairs two steps of a JSON-output
round trip:

1. ``format_instructions()`` renders prompt text that embeds the JSON schema
   of ``model_type`` (generated by pydantic).
2. ``convert(text)`` pulls the JSON document out of the model's reply
   (markdown fences, leading prose, trailing commentary) and validates it into
   ``model_type``.

``model_type`` may be a ``BaseModel`` subclass or any type pydantic's
``TypeAdapter`` accepts (``list[Item]``, ``dict[str, int]``...).
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import StructuredOutputError

T = TypeVar("T")

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)

_INSTRUCTIONS = (
    "Your response should be in JSON format.\n"
    "The JSON should match this schema: {schema}\n"
    "Do not include any explanations, only provide a RFC8259 compliant JSON response.\n"
)


def extract_json_text(text: str) -> Optional[str]:
    """Return the first JSON object/array embedded in ``text``, else ``None``.

    Fenced code blocks are preferred; otherwise the text is scanned for the
    first ``{`` or ``[`` that starts a complete JSON document.
    """
    candidates = [m.group(1) for m in _FENCE_RE.finditer(text)]
    candidates.append(text)
    decoder = json.JSONDecoder()
    for candidate in candidates:
        for pos, ch in enumerate(candidate):
            if ch not in "{[":
                continue
            try:
                _, end = decoder.raw_decode(candidate, pos)
            except ValueError:
                continue
            return candidate[pos:end]
    return None


class StructuredOutputConverter(Generic[T]):
    """Convert model replies into instances of ``model_type``."""

    def __init__(self, model_type: Type[T]) -> None:
        self.model_type = model_type
        self._adapter: TypeAdapter[T] = TypeAdapter(model_type)

    @property
    def type_name(self) -> str:
        return getattr(self.model_type, "__name__", repr(self.model_type))

    def json_schema(self) -> Dict[str, Any]:
        """Return the JSON schema of ``model_type``."""
        return self._adapter.json_schema()

    def format_instructions(self) -> str:
        """Return prompt text asking for JSON matching the schema."""
        return _INSTRUCTIONS.format(schema=json.dumps(self.json_schema(), separators=(",", ":")))

    def convert(self, text: Optional[str]) -> T:
        """Extract and validate the JSON document in ``text``.

        Raises:
            StructuredOutputError: On empty input, when no JSON document is
                found, or when validation against ``model_type`` fails.
        """
        if text is None or not text.strip():
            raise StructuredOutputError("Empty input cannot be converted", text=text)
        payload = extract_json_text(text)
        if payload is None:
            raise StructuredOutputError(f"No JSON document found for {self.type_name}", text=text)
        try:
            return self._adapter.validate_json(payload)
        except ValidationError as e:
            raise StructuredOutputError(f"Failed to convert response to {self.type_name}", text=text, raw=e) from e


__all__ = ["StructuredOutputConverter", "extract_json_text"]
