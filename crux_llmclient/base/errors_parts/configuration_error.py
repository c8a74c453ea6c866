"""
Configuration error exception type.

Raised synchronously for programming errors such as missing producers. This is
the only failure the client propagates instead of folding into a result value.
"""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when the client is wired incorrectly (e.g. a ``None`` producer)."""


def require(component: object, name: str) -> None:
    """Raise :class:`ConfigurationError` when ``component`` is ``None``.

    Parameters:
        component: Value that must be present.
        name: Human-readable name used in the error message.
    """
    if component is None:
        raise ConfigurationError(f"{name} must not be None")


__all__ = ["ConfigurationError", "require"]
