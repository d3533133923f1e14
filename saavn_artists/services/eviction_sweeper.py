"""Purges expired entries from the result cache.

Two triggers, either of which alone keeps the cache bounded by its TTL:

- a timer loop started with the application (``start``/``stop``);
- :meth:`EvictionSweeper.maybe_sweep`, called on cache misses, which with
  a fixed low probability schedules a sweep via ``loop.call_soon`` so the
  request that triggered it never waits for it.

Freshness never depends on the sweeper: lookups treat stale entries as
absent whether or not they have been removed yet.
"""

from __future__ import annotations

import asyncio
import random
from typing import Any

import structlog

from saavn_artists.interfaces.cache_provider import ICacheProvider
from saavn_artists.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


class EvictionSweeper:
    """Periodic and probabilistic cache eviction.

    Parameters
    ----------
    cache:
        The cache to sweep.
    interval:
        Seconds between timer-driven sweeps; ``0`` disables the loop.
    probability:
        Chance that :meth:`maybe_sweep` schedules a sweep; ``0`` disables it.
    rng:
        Random source; injectable for deterministic tests.
    """

    def __init__(
        self,
        cache: ICacheProvider,
        interval: float = 60.0,
        probability: float = 0.1,
        rng: random.Random | None = None,
    ) -> None:
        self._cache = cache
        self._interval = interval
        self._probability = probability
        self._rng = rng or random.Random()
        self._task: asyncio.Task[Any] | None = None
        self._sweeps = 0
        self._removed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def stats(self) -> dict[str, int]:
        return {"sweeps": self._sweeps, "removed": self._removed}

    def sweep_now(self) -> int:
        """Run one sweep synchronously and return the number removed."""
        removed = self._cache.sweep()
        self._sweeps += 1
        self._removed += removed
        if removed:
            _logger.info("cache_eviction", removed=removed)
        return removed

    def maybe_sweep(self) -> bool:
        """With probability ``probability``, schedule a sweep off the request path."""
        if self._probability <= 0 or self._rng.random() >= self._probability:
            return False
        asyncio.get_running_loop().call_soon(self.sweep_now)
        return True

    def start(self) -> None:
        """Start the timer loop on the running event loop (idempotent)."""
        if self._interval <= 0 or self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        _logger.info("sweeper_started", interval=self._interval)

    async def stop(self) -> None:
        """Cancel the timer loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        _logger.info("sweeper_stopped", sweeps=self._sweeps, removed=self._removed)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.sweep_now()
            except Exception as exc:
                # A failed sweep must not end the loop; the next tick retries.
                _logger.error("cache_eviction_failed", error=str(exc))
