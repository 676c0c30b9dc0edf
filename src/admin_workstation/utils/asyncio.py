from __future__ import annotations

import asyncio
from typing import Any, Awaitable, TypeVar


ResultT = TypeVar("ResultT")


class AsyncBridge:
    """Schedule Qt-originated coroutines on the asyncio (qasync) loop.

    Scheduled futures are held until they finish so fire-and-forget intents
    from slots are not garbage collected mid-flight.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_event_loop()
        self._pending: set[asyncio.Future[Any]] = set()

    def run_coroutine(self, coro: Awaitable[ResultT]) -> asyncio.Future[ResultT]:
        future = asyncio.ensure_future(coro, loop=self._loop)
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)
        return future


__all__ = ["AsyncBridge"]
