"""StreamController: cancellable async-iterator facade over a stream.

Wraps any stream operation that accepts a ``cancellation_token`` keyword and
remembers the terminal unit once iteration reaches it. Cancellation is
cooperative: ``cancel`` flips the token, the provider stops pulling lines and
releases the response, and iteration ends without a terminal unit.

Example::

    controller = StreamController(lambda token: provider.stream(inp, cancellation_token=token))
    async for chunk in controller:
        if too_long(chunk):
            controller.cancel("enough")
"""
from __future__ import annotations

from typing import AsyncIterator, Callable, Generic, Optional, TypeVar, Union

from ..cancellation import CancellationToken
from ..errors import ClientError
from ..models import OutputChunk, SseEvent

UnitT = TypeVar("UnitT", OutputChunk, SseEvent)


def _is_terminal(unit: Union[OutputChunk, SseEvent]) -> bool:
    if isinstance(unit, SseEvent):
        return unit.is_terminal()
    return unit.done


def _error_of(unit: Union[OutputChunk, SseEvent, None]) -> Optional[ClientError]:
    if isinstance(unit, SseEvent):
        unit = unit.chunk
    return unit.error if unit is not None else None


class StreamController(Generic[UnitT]):
    """Cancellable iterator over ``OutputChunk`` or ``SseEvent`` units.

    Parameters:
        factory: Called once with the controller's token to open the stream.
        token: Optional externally owned token; a fresh one is created otherwise.
    """

    def __init__(
        self,
        factory: Callable[[CancellationToken], AsyncIterator[UnitT]],
        token: CancellationToken | None = None,
    ) -> None:
        self._token = token or CancellationToken()
        self._source: AsyncIterator[UnitT] = factory(self._token)
        self._terminal: Optional[UnitT] = None
        self._closed = False

    def __aiter__(self) -> "StreamController[UnitT]":
        return self

    async def __anext__(self) -> UnitT:
        if self._closed or self._terminal is not None or self._token.cancelled:
            await self.aclose()
            raise StopAsyncIteration
        try:
            unit = await self._source.__anext__()
        except StopAsyncIteration:
            self._closed = True
            raise
        if _is_terminal(unit):
            self._terminal = unit
        return unit

    async def aclose(self) -> None:
        """Release the underlying stream (idempotent)."""
        if self._closed:
            return
        self._closed = True
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "StreamController[UnitT]":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # API -----------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; safe to call repeatedly or after completion."""
        self._token.cancel(reason)

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def finished(self) -> bool:
        """Whether the terminal unit has been observed."""
        return self._terminal is not None

    @property
    def terminal_unit(self) -> Optional[UnitT]:
        """The terminal unit, once observed."""
        return self._terminal

    @property
    def error(self) -> Optional[ClientError]:
        """Error carried by the terminal unit, if any."""
        return _error_of(self._terminal)


__all__ = ["StreamController"]
