"""Preflight verification gate.

``LlmClient`` sits in front of one transport provider and guarantees that no
request reaches the network unless verification passed:

1. The verification producer runs on the blocking executor and its result is
   folded into ``Proceed`` / ``Reject`` (see ``base.preflight``).
2. On ``Reject`` the caller receives the rejection as the result: the error
   ``Output`` for single responses, or exactly one terminal error unit for
   streams. The input producer and the provider are never invoked.
3. On ``Proceed`` the input producer runs on the blocking executor and the
   resulting ``Input`` is handed to the provider. A ``PreflightRejection``
   raised while building the input becomes the terminal unit carrying that
   exact error; other exceptions are normalized.

Only wiring mistakes raise (``ConfigurationError``): ``None`` producers are
rejected synchronously, before anything is scheduled, and a producer that
returns ``None`` fails the call.

Example::

    client = LlmClient.create_with_httpx()
    output = await client.verify_and_send(check_quota, lambda: Input.chat(url, body))
    async for chunk in client.verify_and_stream(check_quota, build_stream_input):
        ...
"""

from __future__ import annotations

import uuid
from concurrent.futures import Executor
from contextlib import aclosing
from typing import Any, AsyncIterator, Awaitable, Optional, Union

import httpx

from .base.cancellation import CancellationToken
from .base.errors import ConfigurationError, require
from .base.executors import run_blocking
from .base.interfaces import ChatBackend, LlmClientProvider
from .base.json_codec import DEFAULT_CODEC, JsonCodec
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.models import Input, Output, OutputChunk, ResponseMode, SseEvent
from .base.preflight import (
    InputProducer,
    PreflightDecision,
    Reject,
    VerificationProducer,
    evaluate_verification,
    reject_from_exception,
)
from .chat_backend import ChatBackendLlmProvider
from .config import ClientConfig
from .httpx_provider import HttpxLlmProvider

Unit = Union[OutputChunk, SseEvent]


def _terminal_unit(output: Output, mode: ResponseMode) -> Unit:
    chunk = OutputChunk.for_error(output.error)  # type: ignore[arg-type]
    return SseEvent.of(chunk) if mode is ResponseMode.SSE else chunk


class LlmClient:
    """Gate verification and input construction in front of a provider.

    Parameters:
        provider: Transport strategy, chosen once for the client's lifetime.
        executor: Executor for the blocking producers; defaults to the shared
            pool from ``base.executors``.
        codec: JSON codec exposed for input construction helpers.
    """

    def __init__(
        self,
        provider: LlmClientProvider,
        *,
        executor: Optional[Executor] = None,
        codec: Optional[JsonCodec] = None,
    ) -> None:
        require(provider, "provider")
        self._provider = provider
        self._executor = executor
        self._codec = codec or DEFAULT_CODEC
        self._logger = get_logger("client")

    # ---- construction ----------------------------------------------------
    @classmethod
    def create_with_httpx(
        cls,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        config: Optional[ClientConfig] = None,
        codec: Optional[JsonCodec] = None,
        executor: Optional[Executor] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "LlmClient":
        """Create a client over the native HTTP transport."""
        codec = codec or DEFAULT_CODEC
        provider = HttpxLlmProvider(http_client, config=config, codec=codec, transport=transport)
        return cls(provider, executor=executor, codec=codec)

    @classmethod
    def create_with_chat_backend(cls, backend: ChatBackend, *, executor: Optional[Executor] = None) -> "LlmClient":
        """Create a client over a chat-oriented backend."""
        require(backend, "backend")
        return cls(ChatBackendLlmProvider(backend), executor=executor)

    @property
    def provider(self) -> LlmClientProvider:
        return self._provider

    @property
    def codec(self) -> JsonCodec:
        return self._codec

    async def aclose(self) -> None:
        """Release provider resources (owned HTTP clients)."""
        aclose = getattr(self._provider, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "LlmClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- gate ------------------------------------------------------------
    def verify_and_execute(
        self,
        verification_producer: VerificationProducer,
        input_producer: InputProducer,
        mode: ResponseMode,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Union[Awaitable[Output], AsyncIterator[OutputChunk], AsyncIterator[SseEvent]]:
        """Verify, then execute in ``mode``.

        Returns:
            An awaitable ``Output`` for ``SINGLE``; an async iterator of
            ``OutputChunk`` for ``NDJSON`` or of ``SseEvent`` for ``SSE``.

        Raises:
            ConfigurationError: Immediately, if a producer or the mode is ``None``
                or the mode is not a ``ResponseMode`` value.
        """
        require(verification_producer, "verification producer")
        require(input_producer, "input producer")
        require(mode, "response mode")
        try:
            mode = ResponseMode(mode)
        except ValueError as e:
            raise ConfigurationError(f"unknown response mode: {mode!r}") from e
        if mode is ResponseMode.SINGLE:
            return self._send_flow(verification_producer, input_producer)
        return self._stream_flow(verification_producer, input_producer, mode, cancellation_token)

    def verify_and_send(
        self, verification_producer: VerificationProducer, input_producer: InputProducer
    ) -> Awaitable[Output]:
        """Verify, then perform a single request/response exchange."""
        return self.verify_and_execute(verification_producer, input_producer, ResponseMode.SINGLE)  # type: ignore[return-value]

    def verify_and_stream(
        self,
        verification_producer: VerificationProducer,
        input_producer: InputProducer,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[OutputChunk]:
        """Verify, then stream NDJSON chunks."""
        return self.verify_and_execute(  # type: ignore[return-value]
            verification_producer, input_producer, ResponseMode.NDJSON, cancellation_token=cancellation_token
        )

    def verify_and_stream_sse(
        self,
        verification_producer: VerificationProducer,
        input_producer: InputProducer,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[SseEvent]:
        """Verify, then stream SSE events."""
        return self.verify_and_execute(  # type: ignore[return-value]
            verification_producer, input_producer, ResponseMode.SSE, cancellation_token=cancellation_token
        )

    # ---- without verification -------------------------------------------
    def handle_send(self, input_producer: InputProducer) -> Awaitable[Output]:
        """Build the input and send it, skipping verification."""
        require(input_producer, "input producer")
        return self._send_flow(None, input_producer)

    def handle_stream(
        self, input_producer: InputProducer, *, cancellation_token: Optional[CancellationToken] = None
    ) -> AsyncIterator[OutputChunk]:
        """Build the input and stream NDJSON chunks, skipping verification."""
        require(input_producer, "input producer")
        return self._stream_flow(None, input_producer, ResponseMode.NDJSON, cancellation_token)  # type: ignore[return-value]

    def handle_stream_sse(
        self, input_producer: InputProducer, *, cancellation_token: Optional[CancellationToken] = None
    ) -> AsyncIterator[SseEvent]:
        """Build the input and stream SSE events, skipping verification."""
        require(input_producer, "input producer")
        return self._stream_flow(None, input_producer, ResponseMode.SSE, cancellation_token)  # type: ignore[return-value]

    # ---- internals -------------------------------------------------------
    def _context(self, mode: ResponseMode) -> LogContext:
        return LogContext(mode=mode.value, request_id=uuid.uuid4().hex)

    async def _decide(
        self,
        verification_producer: VerificationProducer,
        input_producer: InputProducer,
        ctx: LogContext,
    ) -> PreflightDecision:
        normalized_log_event(self._logger, "preflight.start", ctx, phase="preflight", attempt=1, emitted=None)
        try:
            verification = await run_blocking(verification_producer, executor=self._executor)
        except ConfigurationError:
            raise
        except Exception as e:
            decision: PreflightDecision = reject_from_exception(e)
        else:
            decision = evaluate_verification(verification, input_producer)
        if isinstance(decision, Reject):
            normalized_log_event(
                self._logger,
                "preflight.reject",
                ctx,
                phase="preflight",
                attempt=1,
                emitted=False,
                error_code=decision.error.code,
                status_code=decision.output.status_code,
            )
        else:
            normalized_log_event(self._logger, "preflight.proceed", ctx, phase="preflight", attempt=1, emitted=None)
        return decision

    async def _build_input(self, input_producer: InputProducer, ctx: LogContext) -> Union[Input, Reject]:
        try:
            built = await run_blocking(input_producer, executor=self._executor)
        except ConfigurationError:
            raise
        except Exception as e:
            rejected = reject_from_exception(e)
            normalized_log_event(
                self._logger,
                "preflight.reject",
                ctx,
                phase="input",
                attempt=1,
                emitted=False,
                error_code=rejected.error.code,
            )
            return rejected
        if built is None:
            raise ConfigurationError("input producer returned None")
        if isinstance(built, Input):
            ctx.url = built.url
        return built

    async def _prepare(
        self,
        verification_producer: Optional[VerificationProducer],
        input_producer: InputProducer,
        ctx: LogContext,
    ) -> Union[Input, Reject]:
        if verification_producer is not None:
            decision = await self._decide(verification_producer, input_producer, ctx)
            if isinstance(decision, Reject):
                return decision
            input_producer = decision.input_producer
        return await self._build_input(input_producer, ctx)

    async def _send_flow(
        self,
        verification_producer: Optional[VerificationProducer],
        input_producer: InputProducer,
    ) -> Output:
        ctx = self._context(ResponseMode.SINGLE)
        prepared = await self._prepare(verification_producer, input_producer, ctx)
        if isinstance(prepared, Reject):
            return prepared.output
        return await self._provider.send(prepared)

    async def _stream_flow(
        self,
        verification_producer: Optional[VerificationProducer],
        input_producer: InputProducer,
        mode: ResponseMode,
        cancellation_token: Optional[CancellationToken],
    ) -> AsyncIterator[Any]:
        ctx = self._context(mode)
        prepared = await self._prepare(verification_producer, input_producer, ctx)
        if isinstance(prepared, Reject):
            yield _terminal_unit(prepared.output, mode)
            return
        kwargs = {"cancellation_token": cancellation_token} if cancellation_token is not None else {}
        if mode is ResponseMode.SSE:
            units = self._provider.stream_sse(prepared, **kwargs)
        else:
            units = self._provider.stream(prepared, **kwargs)
        async with aclosing(units):
            async for unit in units:
                yield unit


__all__ = ["LlmClient"]
