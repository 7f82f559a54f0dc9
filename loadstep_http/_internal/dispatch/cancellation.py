"""Cancellation of in-flight dispatch steps."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from loadstep_http.exceptions import RequestCancelledError

T = TypeVar("T")


async def run_cancellable(awaitable: Awaitable[T], cancel_event: asyncio.Event | None) -> T:
    """Await ``awaitable`` unless ``cancel_event`` fires first.

    Raises:
        RequestCancelledError: If the event is set before the awaitable completes.
    """
    if cancel_event is None:
        return await awaitable

    task = asyncio.ensure_future(awaitable)
    if cancel_event.is_set():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise RequestCancelledError("Dispatch cancelled before it started")

    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for pending in (task, waiter):
            if not pending.done():
                pending.cancel()

    if task.done() and not task.cancelled():
        await asyncio.gather(waiter, return_exceptions=True)
        return task.result()

    await asyncio.gather(task, waiter, return_exceptions=True)
    raise RequestCancelledError("Dispatch cancelled while awaiting the transport")
