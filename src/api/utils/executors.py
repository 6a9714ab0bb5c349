"""Execution helpers bridging synchronous services into async contexts."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Callable
from threading import Event
from typing import Any, TypeVar

from starlette.requests import Request

T = TypeVar("T")


async def run_sync(func: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
    """Execute *func* in a worker thread and return the result."""

    return await asyncio.to_thread(func, *args, **kwargs)


@contextlib.asynccontextmanager
async def cancel_on_disconnect(
    request: Request, cancellation: Event, *, poll_interval: float = 0.5
) -> AsyncIterator[Event]:
    """Set *cancellation* once the client behind *request* goes away.

    The watcher exits through ``stopped``; ``Request.is_disconnected`` polls
    inside a cancelled scope that absorbs ``Task.cancel``.
    """

    stopped = asyncio.Event()

    async def _watch() -> None:
        while not stopped.is_set() and not cancellation.is_set():
            if await request.is_disconnected():
                cancellation.set()
                return
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stopped.wait(), timeout=poll_interval)

    watcher = asyncio.create_task(_watch())
    try:
        yield cancellation
    finally:
        stopped.set()
        await watcher


__all__ = ["run_sync", "cancel_on_disconnect"]
