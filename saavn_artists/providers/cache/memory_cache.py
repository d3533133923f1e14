"""In-memory cache provider backed by ``cachetools.LRUCache``.

Entries keep their insertion time so freshness is decided per lookup and
stale entries stay in place until the eviction sweeper removes them.  The
LRU bound caps memory between sweeps.  Suitable for single-process
deployments only; nothing is shared across workers.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import structlog
from cachetools import LRUCache

from saavn_artists.interfaces.cache_provider import ICacheProvider
from saavn_artists.models.cache import CacheEntry, CacheLookup

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """Lock-guarded in-memory result cache with TTL-based validity.

    Parameters
    ----------
    ttl:
        Seconds an entry stays fresh.
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted, independent of freshness.
    timer:
        Monotonic clock; injectable so tests can advance time.
    """

    def __init__(
        self,
        ttl: float = 300.0,
        max_size: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._timer = timer
        self._cache: LRUCache[str, CacheEntry] = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def lookup(self, key: str) -> CacheLookup:
        """Return ``(payload, found, fresh)`` for *key*."""
        with self._lock:
            entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return CacheLookup.miss()

        fresh = entry.is_fresh(self._timer(), self._ttl)
        if fresh:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_stale", key=key, age=round(entry.age(self._timer()), 2))
        return CacheLookup(payload=entry.payload, found=True, fresh=fresh)

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/stale."""
        result = await self.lookup(key)
        return result.payload if result.fresh else None

    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*; the last writer wins."""
        entry = CacheEntry(key=key, payload=value, stored_at=self._timer())
        with self._lock:
            self._cache[key] = entry
        logger.debug("cache_set", key=key)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        with self._lock:
            self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return (await self.lookup(key)).fresh

    def sweep(self, ttl: float | None = None) -> int:
        """Remove every entry with ``now - stored_at >= ttl``."""
        threshold = self._ttl if ttl is None else ttl
        now = self._timer()
        with self._lock:
            expired = [
                key for key, entry in self._cache.items()
                if not entry.is_fresh(now, threshold)
            ]
            for key in expired:
                del self._cache[key]
            remaining = len(self._cache)
        if expired:
            logger.debug("cache_swept", removed=len(expired), remaining=remaining)
        return len(expired)

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop every entry.  Called on application shutdown."""
        with self._lock:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return entry counts for the ``/cache/stats`` endpoint."""
        now = self._timer()
        with self._lock:
            entries = list(self._cache.values())
            max_size = self._cache.maxsize
        fresh = sum(1 for entry in entries if entry.is_fresh(now, self._ttl))
        return {
            "entries": len(entries),
            "fresh": fresh,
            "stale": len(entries) - fresh,
            "max_size": max_size,
            "ttl_seconds": self._ttl,
        }
