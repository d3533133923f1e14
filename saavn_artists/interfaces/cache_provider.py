"""Abstract base class for cache service providers.

Defines the contract for the process-wide result cache.  The in-memory
implementation is the only one shipped; the interface exists so the
search service and its tests depend on behaviour, not on a concrete
store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from saavn_artists.models.cache import CacheLookup


class ICacheProvider(ABC):
    """Contract for key-value cache services with TTL-based validity.

    Every operation is async so a network-backed store could implement it
    without blocking the event loop; implementations must not perform
    network I/O in :meth:`lookup`.
    """

    @abstractmethod
    async def lookup(self, key: str) -> CacheLookup:
        """Return ``(payload, found, fresh)`` for *key*.

        Parameters
        ----------
        key:
            The cache key to look up.

        Returns
        -------
        CacheLookup
            ``found`` is ``True`` when an entry exists at all; ``fresh``
            is ``True`` only when it is also younger than the TTL.
        """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the payload stored under *key* if fresh, else ``None``."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, overwriting any existing entry.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*; no-op if absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and fresh."""

    @abstractmethod
    def sweep(self, ttl: float | None = None) -> int:
        """Remove every entry whose age is at least *ttl* seconds.

        Synchronous so it can be scheduled with ``loop.call_soon``.

        Parameters
        ----------
        ttl:
            Age threshold in seconds.  ``None`` uses the store's TTL.

        Returns
        -------
        int
            Number of entries removed.
        """
