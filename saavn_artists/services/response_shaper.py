"""Projects provider results into the public response envelope.

Three optional steps run in order on a copy of the payload's artists:

1. language-keyword filter, guarded so it cannot wipe out a sparse page;
2. stable sort by descending popularity;
3. projection to :class:`ArtistOut`, with id/url/popularity only when
   ``extended`` is requested.

``total`` is always the payload's total.  Filtering changes what is shown
on the page, not the provider's count of matches.
"""

from __future__ import annotations

import structlog

from saavn_artists.config.languages import LanguageProfile
from saavn_artists.models.artist import Artist, SearchResult
from saavn_artists.models.query import QueryPlan
from saavn_artists.models.response import ArtistOut, ArtistSearchResponse
from saavn_artists.utils.logging import get_logger
from saavn_artists.utils.text_normalizer import contains_any_keyword

_logger: structlog.BoundLogger = get_logger(__name__)


class ResponseShaper:
    """Builds :class:`ArtistSearchResponse` objects.

    Parameters
    ----------
    catalog:
        Language profiles; their ``keywords`` drive the filter.
    page_size:
        Reported as ``perPage``.
    max_drop_ratio:
        The filter is skipped when it would remove more than this share
        of a non-empty list.
    """

    def __init__(
        self,
        catalog: dict[str, LanguageProfile],
        page_size: int = 50,
        max_drop_ratio: float = 0.5,
    ) -> None:
        self._catalog = catalog
        self._page_size = page_size
        self._max_drop_ratio = max_drop_ratio

    def shape(
        self,
        plan: QueryPlan,
        payload: SearchResult,
        *,
        cached: bool,
        filter_language: bool = False,
        sort_by_popularity: bool = False,
        extended: bool = False,
    ) -> ArtistSearchResponse:
        artists = list(payload.artists)
        if filter_language and plan.language is not None:
            artists = self.filter_by_language(artists, plan.language)
        if sort_by_popularity:
            artists = self.sort_by_popularity(artists)

        return ArtistSearchResponse(
            page=plan.page,
            per_page=self._page_size,
            language=plan.language or "default",
            search_query=plan.search_text,
            total=payload.total,
            artists=[self.project(a, extended=extended) for a in artists],
            cached=cached,
        )

    def filter_by_language(self, artists: list[Artist], language: str) -> list[Artist]:
        """Keep artists whose name or role mentions a language keyword.

        Returns the input unchanged when the filter would drop more than
        ``max_drop_ratio`` of a non-empty list.
        """
        profile = self._catalog.get(language)
        if profile is None or not profile.keywords or not artists:
            return artists

        kept = [
            a for a in artists
            if contains_any_keyword(a.name, profile.keywords)
            or contains_any_keyword(a.role, profile.keywords)
        ]
        dropped = len(artists) - len(kept)
        if dropped / len(artists) > self._max_drop_ratio:
            _logger.debug(
                "language_filter_skipped",
                language=language,
                would_drop=dropped,
                of=len(artists),
            )
            return artists
        return kept

    @staticmethod
    def sort_by_popularity(artists: list[Artist]) -> list[Artist]:
        return sorted(artists, key=lambda a: a.popularity, reverse=True)

    @staticmethod
    def project(artist: Artist, *, extended: bool = False) -> ArtistOut:
        if not extended:
            return ArtistOut(name=artist.name, role=artist.role, image=artist.image)
        return ArtistOut(
            name=artist.name,
            role=artist.role,
            image=artist.image,
            id=artist.id,
            url=artist.profile_url,
            popularity=artist.popularity,
        )
