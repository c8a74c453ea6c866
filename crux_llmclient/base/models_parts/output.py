"""
Output DTO representing a completed single-response exchange.

Exactly one of ``body`` (native HTTP transport) or ``message`` (chat-backend
transport) is populated on success. ``error`` is set if and only if the
exchange failed; ``status_code`` always agrees with the error taxonomy.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

from ..constants import DEFAULT_ERROR_STATUS
from ..errors_parts.classification import error_from_status, unauthorized_error
from ..errors_parts.client_error import ClientError
from ..errors_parts.error_type import IMPLIED_STATUS, ErrorType
from ..json_codec import DEFAULT_CODEC, JsonCodec
from .message import Message

ModelT = TypeVar("ModelT", bound=BaseModel)


def _status_for(error: ClientError) -> int:
    """Return the HTTP status implied by an error's code or category."""
    status = error.http_status()
    if status is not None:
        return status
    try:
        return IMPLIED_STATUS.get(ErrorType(error.type), DEFAULT_ERROR_STATUS)
    except ValueError:
        return DEFAULT_ERROR_STATUS


@dataclass(frozen=True)
class Output:
    """Result of a single-response call.

    Attributes:
        status_code: HTTP status (or the status implied by the error).
        headers: Response headers (single-valued).
        body: Raw response body for HTTP transports.
        error: Normalized error, ``None`` on success.
        message: Assistant message for chat-backend transports.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    error: Optional[ClientError] = None
    message: Optional[Message] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))

    # ---- inspection -----------------------------------------------------
    def is_successful(self) -> bool:
        """Return True when no error is attached."""
        return self.error is None

    def failure_reason(self) -> Optional[str]:
        """Return the error message, or ``None`` on success."""
        return self.error.message if self.error is not None else None

    def get_header(self, name: str) -> Optional[str]:
        """Return a header value using case-insensitive lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def parse_json_body(self, model: Optional[Type[ModelT]] = None, codec: JsonCodec = DEFAULT_CODEC) -> Any:
        """Parse the body as JSON, optionally validating into a pydantic model.

        Raises:
            ValueError: If there is no body, or it is not valid JSON.
            pydantic.ValidationError: If ``model`` validation fails.
        """
        if self.body is None:
            raise ValueError("Output has no body to parse")
        if model is not None:
            return model.model_validate_json(self.body)
        return codec.loads(self.body)

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly mapping of all fields."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "error": self.error.to_dict() if self.error is not None else None,
            "message": self.message.to_dict() if self.message is not None else None,
        }

    # ---- factories ------------------------------------------------------
    @classmethod
    def for_success(cls, status_code: int, headers: Optional[Mapping[str, str]], body: Optional[str]) -> "Output":
        """Create a successful output carrying a raw body."""
        return cls(status_code, headers or {}, body, None, None)

    @classmethod
    def for_message(cls, message: Message, status_code: int = 200) -> "Output":
        """Create a successful output carrying an assistant message."""
        return cls(status_code, {}, None, None, message)

    @classmethod
    def for_success_verification(cls) -> "Output":
        """Return the output a verification producer emits to let a call proceed."""
        return cls(200, {}, None, None, None)

    @classmethod
    def from_response(
        cls,
        status_code: int,
        headers: Optional[Mapping[str, str]],
        body: Optional[str],
        codec: JsonCodec = DEFAULT_CODEC,
    ) -> "Output":
        """Create an output from an HTTP exchange, normalizing non-2xx bodies."""
        if 200 <= status_code < 300:
            return cls.for_success(status_code, headers, body)
        error = error_from_status(status_code, body, codec)
        return cls(status_code, headers or {}, body, error, None)

    @classmethod
    def for_error(cls, error: ClientError, status_code: Optional[int] = None) -> "Output":
        """Create an error output.

        Parameters:
            error: The normalized error; must not be ``None``.
            status_code: Explicit status; defaults to the status implied by the
                error (``HTTP_<n>`` code, then category, then 500).

        Raises:
            ValueError: If ``error`` is ``None``.
        """
        if error is None:
            raise ValueError("Error must not be None")
        return cls(status_code if status_code is not None else _status_for(error), {}, None, error, None)

    @classmethod
    def for_error_401(cls) -> "Output":
        """Create the standard unauthorized output."""
        return cls.for_error(unauthorized_error())


__all__ = ["Output"]
