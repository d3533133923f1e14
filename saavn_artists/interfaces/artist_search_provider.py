"""Abstract base class for artist-search providers.

Defines the contract for the upstream music-catalog search: one call per
(query, page) pair, returning a parsed :class:`SearchResult` or raising
one of the provider errors in :mod:`saavn_artists.utils.errors`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from saavn_artists.models.artist import SearchResult


class IArtistSearchProvider(ABC):
    """Contract for the music-catalog artist search."""

    @abstractmethod
    async def search_artists(
        self,
        query: str,
        page: int,
        page_size: int,
        language_context: str | None = None,
    ) -> SearchResult:
        """Search the catalog for artists matching *query*.

        Parameters
        ----------
        query:
            Free-text search string sent to the provider.
        page:
            1-based page number.
        page_size:
            Number of results per page.
        language_context:
            Optional language preference forwarded to the provider.

        Returns
        -------
        SearchResult
            The artists on that page and the provider-reported total.

        Raises
        ------
        saavn_artists.utils.errors.UpstreamUnavailableError
            On network failure, timeout, or an HTTP error status.
        saavn_artists.utils.errors.MalformedPayloadError
            If the body contains no JSON object or fails to parse.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"jiosaavn"``."""
