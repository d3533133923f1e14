"""Public interface definitions for the service's pluggable collaborators.

The search service depends on these abstract base classes only; concrete
adapters live in ``saavn_artists/providers/`` and are injected by
``saavn_artists.main`` at application startup.

    Interface               →  Concrete implementation
    ──────────────────────────────────────────────────────
    IArtistSearchProvider   →  JioSaavnProvider
    ICacheProvider          →  MemoryCacheProvider
"""

from saavn_artists.interfaces.artist_search_provider import IArtistSearchProvider
from saavn_artists.interfaces.cache_provider import ICacheProvider

__all__ = [
    "IArtistSearchProvider",
    "ICacheProvider",
]
