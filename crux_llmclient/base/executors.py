"""Blocking-tolerant executor for preflight producers.

Purpose:
    Verification and input producers are arbitrary synchronous callables that
    may perform blocking I/O (token lookups, file reads, template rendering).
    They run on a dedicated, bounded ``ThreadPoolExecutor`` via
    ``loop.run_in_executor`` so they never stall the event loop and never
    compete with the loop's default executor.

Lifecycle & cleanup:
    - The shared executor is created lazily on first use, sized from
      ``ClientConfig.blocking_workers``.
    - It is shut down at interpreter exit via ``atexit``; tests may call
      :func:`shutdown_blocking_executor` explicitly.
"""

from __future__ import annotations

import asyncio
import atexit
import functools
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

from ..config import get_client_config

T = TypeVar("T")

_EXECUTOR: Optional[ThreadPoolExecutor] = None
_LOCK = threading.RLock()
_THREAD_PREFIX = "llmclient-blocking"


def get_blocking_executor() -> ThreadPoolExecutor:
    """Return the shared blocking executor, creating it on first use.

    Thread-safety:
        Creation is guarded by a re-entrant lock; concurrent callers receive
        the same instance.
    """
    global _EXECUTOR
    executor = _EXECUTOR
    if executor is not None:
        return executor
    with _LOCK:
        if _EXECUTOR is None:
            workers = get_client_config().blocking_workers
            _EXECUTOR = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=_THREAD_PREFIX)
        return _EXECUTOR


async def run_blocking(
    func: Callable[..., T],
    *args: Any,
    executor: Optional[Executor] = None,
) -> T:
    """Run ``func(*args)`` on ``executor`` (default: the shared pool) and await it.

    Exceptions raised by ``func`` propagate to the awaiting coroutine.
    """
    loop = asyncio.get_running_loop()
    target = executor if executor is not None else get_blocking_executor()
    return await loop.run_in_executor(target, functools.partial(func, *args))


def shutdown_blocking_executor(wait: bool = True) -> None:
    """Shut down and forget the shared executor (a new one is created on demand)."""
    global _EXECUTOR
    with _LOCK:
        executor, _EXECUTOR = _EXECUTOR, None
    if executor is not None:
        executor.shutdown(wait=wait)


def _cleanup_at_exit() -> None:
    shutdown_blocking_executor(wait=False)


atexit.register(_cleanup_at_exit)

__all__ = ["get_blocking_executor", "run_blocking", "shutdown_blocking_executor"]
