"""Shared pytest fixtures for the saavn-artists test suite."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from saavn_artists.config.languages import LanguageProfile, build_language_catalog
from saavn_artists.interfaces.artist_search_provider import IArtistSearchProvider
from saavn_artists.models.artist import Artist, SearchResult


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_artist(name: str, artist_id: str | None = None, **kwargs: Any) -> Artist:
    return Artist(id=artist_id, name=name, **kwargs)


def make_result(*names: str, total: int | None = None) -> SearchResult:
    artists = [make_artist(n, artist_id=n.lower().replace(" ", "-")) for n in names]
    return SearchResult(artists=artists, total=len(artists) if total is None else total)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubSearchProvider(IArtistSearchProvider):
    """Scripted provider: answers per (query, page), records every call.

    ``responses`` values may be a SearchResult or an exception instance to
    raise.  Unscripted calls return an empty result.  ``delay`` makes every
    call sleep first, so tests can overlap requests.
    """

    def __init__(
        self,
        responses: dict[tuple[str, int], SearchResult | Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.responses = responses or {}
        self.delay = delay
        self.calls: list[dict[str, Any]] = []

    async def search_artists(
        self,
        query: str,
        page: int,
        page_size: int,
        language_context: str | None = None,
    ) -> SearchResult:
        self.calls.append(
            {
                "query": query,
                "page": page,
                "page_size": page_size,
                "language_context": language_context,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        outcome = self.responses.get((query, page), SearchResult.empty())
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get_provider_name(self) -> str:
        return "stub"

    def calls_for(self, query: str, page: int | None = None) -> list[dict[str, Any]]:
        return [
            c for c in self.calls
            if c["query"] == query and (page is None or c["page"] == page)
        ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog() -> dict[str, LanguageProfile]:
    """The built-in language catalog, no overrides."""
    return build_language_catalog()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stub_provider() -> StubSearchProvider:
    return StubSearchProvider()


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """A decoded artist-search body as the provider returns it."""
    return {
        "total": 120,
        "start": 1,
        "results": [
            {
                "id": "455130",
                "name": "A. R. Rahman",
                "role": "music_director",
                "image": "https://c.saavncdn.com/artists/AR_Rahman_150x150.jpg",
                "perma_url": "https://www.jiosaavn.com/artist/a.-r.-rahman-songs/ABC",
                "ctr": 3120,
            },
            {
                "id": "459320",
                "name": "Anirudh Ravichander",
                "role": "singer",
                "image": "https://c.saavncdn.com/artists/Anirudh_150x150.jpg",
                "perma_url": "https://www.jiosaavn.com/artist/anirudh-ravichander-songs/DEF",
                "play_count": "8800",
            },
        ],
    }
