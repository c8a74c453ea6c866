"""
Normalized client error value.

`ClientError` is the single error shape embedded in `Output`, `OutputChunk`
and SSE events regardless of whether the failure came from a transport
exception, a non-2xx provider response or a preflight rejection.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import HTTP_CODE_PREFIX


@dataclass(frozen=True)
class ClientError:
    """Structured error carried by client results.

    Attributes:
        message: Human-readable error message (raw body for API errors).
        type: Category tag, one of :class:`ErrorType` values or the concrete
            exception class name for unclassified failures.
        code: Provider-supplied code, ``HTTP_<status>`` or ``INTERNAL_ERROR``.
        cause: Optional originating exception, for diagnostics only.
    """

    message: str
    type: str
    code: str
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def http_status(self) -> Optional[int]:
        """Return the status encoded in an ``HTTP_<status>`` code, else ``None``."""
        if not self.code.startswith(HTTP_CODE_PREFIX):
            return None
        digits = self.code[len(HTTP_CODE_PREFIX):]
        if digits.isdigit() and len(digits) == 3:
            return int(digits)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape (``cause`` is never serialized)."""
        return {"message": self.message, "type": self.type, "code": self.code}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientError":
        """Build an error from a wire mapping, tolerating missing keys."""
        return cls(
            message=str(data.get("message") or ""),
            type=str(data.get("type") or "ApiError"),
            code=str(data.get("code") or "INTERNAL_ERROR"),
        )


__all__ = ["ClientError"]
