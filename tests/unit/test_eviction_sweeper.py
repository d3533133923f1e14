"""Unit tests for EvictionSweeper."""

from __future__ import annotations

import asyncio
import random
from unittest.mock import MagicMock

import pytest

from saavn_artists.providers.cache.memory_cache import MemoryCacheProvider
from saavn_artists.services.eviction_sweeper import EvictionSweeper
from tests.conftest import FakeClock


class _FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__()
        self._value = value

    def random(self) -> float:
        return self._value


@pytest.fixture()
def cache(clock: FakeClock) -> MemoryCacheProvider:
    return MemoryCacheProvider(ttl=10, timer=clock)


class TestEvictionSweeper:
    @pytest.mark.asyncio
    async def test_sweep_now_removes_expired(
        self, cache: MemoryCacheProvider, clock: FakeClock
    ) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        clock.advance(10)
        sweeper = EvictionSweeper(cache)

        assert sweeper.sweep_now() == 2
        assert sweeper.stats() == {"sweeps": 1, "removed": 2}

    @pytest.mark.asyncio
    async def test_maybe_sweep_below_probability_schedules(
        self, cache: MemoryCacheProvider, clock: FakeClock
    ) -> None:
        await cache.set("a", 1)
        clock.advance(11)
        sweeper = EvictionSweeper(cache, probability=0.1, rng=_FixedRandom(0.05))

        assert sweeper.maybe_sweep() is True
        # Scheduled with call_soon: nothing removed until the loop turns.
        assert cache.stats()["entries"] == 1
        await asyncio.sleep(0)
        assert cache.stats()["entries"] == 0

    @pytest.mark.asyncio
    async def test_maybe_sweep_above_probability_skips(self, cache: MemoryCacheProvider) -> None:
        sweeper = EvictionSweeper(cache, probability=0.1, rng=_FixedRandom(0.5))
        assert sweeper.maybe_sweep() is False
        await asyncio.sleep(0)
        assert sweeper.stats()["sweeps"] == 0

    @pytest.mark.asyncio
    async def test_zero_probability_never_sweeps(self, cache: MemoryCacheProvider) -> None:
        sweeper = EvictionSweeper(cache, probability=0, rng=_FixedRandom(0.0))
        assert sweeper.maybe_sweep() is False

    @pytest.mark.asyncio
    async def test_timer_loop_sweeps_until_stopped(
        self, cache: MemoryCacheProvider, clock: FakeClock
    ) -> None:
        await cache.set("a", 1)
        clock.advance(11)
        sweeper = EvictionSweeper(cache, interval=0.01, probability=0)

        sweeper.start()
        assert sweeper.running is True
        await asyncio.sleep(0.05)
        await sweeper.stop()

        assert sweeper.running is False
        assert sweeper.stats()["sweeps"] >= 1
        assert cache.stats()["entries"] == 0

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, cache: MemoryCacheProvider) -> None:
        sweeper = EvictionSweeper(cache, interval=60)
        sweeper.start()
        first = sweeper._task
        sweeper.start()
        assert sweeper._task is first
        await sweeper.stop()

    @pytest.mark.asyncio
    async def test_zero_interval_disables_loop(self, cache: MemoryCacheProvider) -> None:
        sweeper = EvictionSweeper(cache, interval=0)
        sweeper.start()
        assert sweeper.running is False
        await sweeper.stop()

    @pytest.mark.asyncio
    async def test_loop_survives_failed_sweep(self) -> None:
        failing_cache = MagicMock()
        failing_cache.sweep = MagicMock(side_effect=[RuntimeError("boom"), 0, 0, 0, 0, 0])
        sweeper = EvictionSweeper(failing_cache, interval=0.01)

        sweeper.start()
        await asyncio.sleep(0.05)
        assert sweeper.running is True
        await sweeper.stop()
        assert failing_cache.sweep.call_count >= 2
