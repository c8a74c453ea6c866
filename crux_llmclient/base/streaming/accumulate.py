"""Fold a finished stream back into a single response value."""
from __future__ import annotations

from typing import Iterable, Union

from ..models import Message, Output, OutputChunk, SseEvent


def accumulate_chunks(units: Iterable[Union[OutputChunk, SseEvent]]) -> Output:
    """Concatenate streamed content into one ``Output``.

    - Chunk contents are joined in arrival order; the ``[DONE]`` sentinel is skipped.
    - The first error chunk wins: the result is ``Output.for_error`` of that error.
    - An empty sequence yields an empty assistant message.
    """
    parts = []
    for unit in units:
        chunk = unit.chunk if isinstance(unit, SseEvent) else unit
        if chunk is None:
            continue
        if chunk.is_error():
            return Output.for_error(chunk.error)  # type: ignore[arg-type]
        parts.append(chunk.message.content)
    return Output.for_message(Message.assistant("".join(parts)))


__all__ = ["accumulate_chunks"]
