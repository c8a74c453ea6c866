"""ChatBackend implementation on the OpenAI Python SDK.

Purpose:
    Adapt ``openai.AsyncOpenAI`` chat completions to the :class:`ChatBackend`
    Protocol so ``ChatBackendLlmProvider`` can serve OpenAI-compatible
    endpoints without hand-built HTTP bodies.

External dependencies:
    - ``openai`` (optional extra ``crux-llmclient[openai]``). When the SDK is
      not installed, constructing the backend raises ``ConfigurationError``.

Error handling:
    SDK exceptions propagate to the provider, which normalizes them. SDK
    ``RateLimitError`` carries ``status_code == 429`` and is classified as
    ``RateLimitError`` / ``HTTP_429``; timeouts and connection errors map to
    ``HTTP_504`` / ``HTTP_503`` through their httpx causes or status.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from ..base.errors import ConfigurationError
from ..base.interfaces import ChatBackend, ChatOptions
from ..base.models import Message
from ..config import ClientConfig, get_client_config

try:
    from openai import AsyncOpenAI as _AsyncOpenAI  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    _AsyncOpenAI = None  # type: ignore


def _to_sdk_messages(messages: Sequence[Message]) -> List[Dict[str, str]]:
    return [m.to_dict() for m in messages]


class OpenAIChatBackend(ChatBackend):
    """Chat completions via ``AsyncOpenAI``.

    Parameters:
        client: Pre-built SDK client (any object exposing
            ``chat.completions.create``). When omitted, one is constructed from
            ``config`` (``api_key``, ``base_url``).
        config: Client configuration; defaults to ``get_client_config()``.
        default_model: Model used when ``ChatOptions.model`` is unset; falls
            back to ``config.model``.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        config: Optional[ClientConfig] = None,
        default_model: Optional[str] = None,
    ) -> None:
        cfg = config or get_client_config()
        if client is None:
            if _AsyncOpenAI is None:
                raise ConfigurationError("openai SDK not installed; install crux-llmclient[openai]")
            client = _AsyncOpenAI(api_key=cfg.api_key, base_url=cfg.base_url)
        self._client = client
        self._default_model = default_model or cfg.model

    def _params(self, messages: Sequence[Message], options: ChatOptions, *, stream: bool) -> Dict[str, Any]:
        params: Dict[str, Any] = {"messages": _to_sdk_messages(messages), **options.to_kwargs()}
        params.setdefault("model", self._default_model)
        if params["model"] is None:
            raise ConfigurationError("no model configured for OpenAIChatBackend")
        if stream:
            params["stream"] = True
        return params

    async def complete(self, messages: Sequence[Message], options: ChatOptions) -> str:
        """Return the first choice's message content (empty string when absent)."""
        resp = await self._client.chat.completions.create(**self._params(messages, options, stream=False))
        choices = getattr(resp, "choices", None) or []
        if not choices:
            return ""
        return getattr(choices[0].message, "content", None) or ""

    async def stream(self, messages: Sequence[Message], options: ChatOptions) -> AsyncIterator[str]:
        """Yield non-empty content deltas from a streamed completion."""
        sdk_stream = await self._client.chat.completions.create(**self._params(messages, options, stream=True))
        async for event in sdk_stream:
            choices = getattr(event, "choices", None) or []
            if not choices:
                continue
            delta = getattr(choices[0], "delta", None)
            text = getattr(delta, "content", None) if delta is not None else None
            if text:
                yield text


__all__ = ["OpenAIChatBackend"]
