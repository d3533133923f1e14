"""Artist and search-result models.

Defines the Pydantic v2 models the provider adapter produces and the cache
stores.  Both are frozen: a cached :class:`SearchResult` is shared by every
request that hits its key, so nothing downstream may mutate it in place.

Key relationships:
    - SearchResult holds an ordered list of Artist objects
    - Artist.identity drives deduplication in the fan-out merge
    - The response shaper projects Artist into the public ArtistOut schema
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from saavn_artists.utils.text_normalizer import normalize_artist_name


class Artist(BaseModel):
    """A single artist record as returned by the search provider.

    ``popularity`` is the provider's click/play counter when it reports
    one (``ctr`` or ``play_count``), else 0.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    role: str = ""
    image: str = ""
    profile_url: str | None = None
    popularity: int = Field(default=0, ge=0)

    @property
    def identity(self) -> str:
        """Deduplication key: provider id when present, else normalized name."""
        if self.id:
            return f"id:{self.id}"
        return f"name:{normalize_artist_name(self.name)}"


class SearchResult(BaseModel):
    """One page of artists plus the provider-reported total.

    For a merged fan-out, ``total`` is the maximum total reported by any
    sub-query, since the provider's totals are approximate and
    query-dependent.
    """

    model_config = ConfigDict(frozen=True)

    artists: list[Artist] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls) -> SearchResult:
        return cls(artists=[], total=0)
