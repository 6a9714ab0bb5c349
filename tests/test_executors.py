import asyncio
from threading import Event

import anyio
import pytest

from api.utils import cancel_on_disconnect, run_sync


class FakeRequest:
    """Polls like Starlette: a receive() wrapped in an already-cancelled scope."""

    def __init__(self, disconnected: bool = False) -> None:
        self.disconnected = disconnected
        self.polls = 0

    async def is_disconnected(self) -> bool:
        self.polls += 1
        with anyio.CancelScope() as scope:
            scope.cancel()
            await anyio.sleep(60)
        return self.disconnected


def run(coro, timeout: float = 5.0):
    return asyncio.run(asyncio.wait_for(coro, timeout=timeout))


def test_disconnect_sets_cancellation() -> None:
    request = FakeRequest(disconnected=True)
    cancellation = Event()

    async def scenario() -> None:
        async with cancel_on_disconnect(request, cancellation, poll_interval=0.01):
            for _ in range(100):
                if cancellation.is_set():
                    break
                await asyncio.sleep(0.01)

    run(scenario())
    assert cancellation.is_set()
    assert request.polls >= 1


def test_body_failure_exits_promptly() -> None:
    request = FakeRequest()
    cancellation = Event()

    async def scenario() -> None:
        async with cancel_on_disconnect(request, cancellation, poll_interval=10):
            await asyncio.sleep(0)
            raise ValueError("invalid input")

    with pytest.raises(ValueError, match="invalid input"):
        run(scenario(), timeout=2.0)
    assert not cancellation.is_set()


def test_normal_exit_stops_watcher() -> None:
    request = FakeRequest()
    cancellation = Event()

    async def scenario() -> int:
        async with cancel_on_disconnect(request, cancellation, poll_interval=10):
            return await run_sync(lambda: 7)

    assert run(scenario(), timeout=2.0) == 7
    assert not cancellation.is_set()
