"""Bounded-concurrency helpers for upstream fan-out.

The search provider is rate-limited, so a fan-out plan never issues more
than a fixed number of simultaneous calls.  Two helpers are exposed:

1. **throttled_gather** -- ``asyncio.gather`` with every awaitable wrapped
   in a semaphore acquire/release.
2. **gather_with_timeout** -- the same, but each awaitable additionally
   carries its own ``asyncio.wait_for`` deadline, so one slow sub-query
   cannot hold the whole batch past the configured timeout.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Run awaitables concurrently, at most ``semaphore`` of them at once.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Semaphore bounding how many awaitables execute at the same time.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    tasks = [_wrapped(c) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)


async def gather_with_timeout(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore,
    timeout: float,
) -> list[_T | BaseException]:
    """Throttled gather where each awaitable gets an independent deadline.

    The deadline starts once the awaitable holds a semaphore slot, so time
    spent queueing behind other sub-queries does not count against it.
    A timed-out awaitable yields an :class:`asyncio.TimeoutError` in its
    result slot; the others are unaffected.
    """

    async def _bounded(coro: Awaitable[_T]) -> _T:
        return await asyncio.wait_for(coro, timeout=timeout)

    return await throttled_gather(
        [_bounded(c) for c in coros],
        semaphore=semaphore,
        return_exceptions=True,
    )
