"""Shared helpers for the client test suite."""

from __future__ import annotations

from typing import AsyncIterator, List, TypeVar

BASE_URL = "http://llm.test"
CHAT_URL = f"{BASE_URL}/v1/chat"

T = TypeVar("T")

HELLO_CHUNK = '{"message":{"role":"assistant","content":"Hello"},"done":false,"index":0}'
WORLD_DONE_CHUNK = '{"message":{"role":"assistant","content":"World"},"done":true,"index":1}'


def ndjson(*lines: str) -> bytes:
    """Join lines into an NDJSON body."""
    return ("\n".join(lines) + "\n").encode("utf-8")


def sse(*payloads: str) -> bytes:
    """Frame payloads as ``data:`` events separated by blank lines."""
    return "".join(f"data: {p}\n\n" for p in payloads).encode("utf-8")


async def collect(stream: AsyncIterator[T]) -> List[T]:
    return [item async for item in stream]
