"""saavn-artists domain models - re-exports all public model classes.

The models are organized across four submodules by concern:
    - artist.py   - Artist records and provider search results
    - cache.py    - Cache entries and lookup results
    - query.py    - Per-request query plans
    - response.py - The search envelope returned to callers
"""

from __future__ import annotations

from saavn_artists.models.artist import Artist, SearchResult
from saavn_artists.models.cache import CacheEntry, CacheLookup
from saavn_artists.models.query import QueryPlan, SubQuery
from saavn_artists.models.response import ArtistOut, ArtistSearchResponse

__all__ = [
    "Artist",
    "ArtistOut",
    "ArtistSearchResponse",
    "CacheEntry",
    "CacheLookup",
    "QueryPlan",
    "SearchResult",
    "SubQuery",
]
