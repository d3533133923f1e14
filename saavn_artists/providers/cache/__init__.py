"""Cache providers.

In-memory TTL cache holding merged search results keyed by
(search text, language, page).  Process-local only: multiple workers each
keep their own copy.
"""

from saavn_artists.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
