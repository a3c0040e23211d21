"""Cooperative cancellation of in-flight fetches.

A cancellation signal is a plain :class:`asyncio.Event` created by the
caller and handed to a collection or resource call. Setting the event makes
the pending (or next) fetch fail with
:class:`~oktakit.exceptions.OperationCancelledError`.

Example::

    stop = asyncio.Event()
    collection = client.groups.list_groups(cancel_event=stop)
    async for group in collection:
        if group.profile.name == "Everyone":
            stop.set()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Coroutine
from typing import Any, Optional, TypeVar

from oktakit.exceptions import OperationCancelledError

T = TypeVar("T")


async def run_cancellable(
    coro: Coroutine[Any, Any, T],
    cancel_event: Optional[asyncio.Event],
) -> T:
    """Await *coro* unless *cancel_event* fires first.

    If the event is already set, *coro* is closed without running. If it
    fires while *coro* is pending, the fetch task is cancelled and awaited
    before :class:`OperationCancelledError` is raised. Exceptions from *coro*
    propagate unchanged.
    """
    if cancel_event is None:
        return await coro
    if cancel_event.is_set():
        coro.close()
        raise OperationCancelledError("Operation was cancelled")

    fetch = asyncio.ensure_future(coro)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait({fetch, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        fetch.cancel()
        waiter.cancel()
        await _drain(fetch, waiter)
        raise

    if fetch in done:
        waiter.cancel()
        await _drain(waiter)
        return fetch.result()

    fetch.cancel()
    await _drain(fetch)
    raise OperationCancelledError("Operation was cancelled")


async def _drain(*tasks: Awaitable[Any]) -> None:
    """Wait for cancelled tasks to finish, discarding their outcome."""
    await asyncio.gather(*tasks, return_exceptions=True)
