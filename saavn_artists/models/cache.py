"""Cache bookkeeping types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload together with the monotonic time it was stored.

    Attributes
    ----------
    key:
        The composite cache key (see ``services.cache_keys``).
    payload:
        The stored value, normally a :class:`SearchResult`.
    stored_at:
        ``time.monotonic()`` reading taken when the entry was written.
    """

    key: str
    payload: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at

    def is_fresh(self, now: float, ttl: float) -> bool:
        """An entry is valid iff ``now - stored_at < ttl``."""
        return self.age(now) < ttl


class CacheLookup(NamedTuple):
    """Result of a cache lookup: ``(payload, found, fresh)``.

    ``fresh`` implies ``found``.  Callers treat a found-but-stale entry
    exactly like a missing one.
    """

    payload: Any
    found: bool
    fresh: bool

    @classmethod
    def miss(cls) -> CacheLookup:
        return cls(payload=None, found=False, fresh=False)
