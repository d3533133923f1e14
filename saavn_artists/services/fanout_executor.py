"""Executes a QueryPlan against the search provider and merges the results.

Single-query plans make one bounded call and let any failure propagate.
Multi-query plans fan out through :func:`gather_with_timeout`, wait for
every sub-query to settle, and merge what succeeded:

    UpstreamUnavailableError / timeout  -> empty contribution, logged
    MalformedPayloadError               -> request fails after the join
    every sub-query unavailable         -> request fails

The merge keeps plan order, drops later duplicates by artist identity, and
reports the largest total any sub-query claimed.
"""

from __future__ import annotations

import asyncio

import structlog

from saavn_artists.interfaces.artist_search_provider import IArtistSearchProvider
from saavn_artists.models.artist import Artist, SearchResult
from saavn_artists.models.query import QueryPlan, SubQuery
from saavn_artists.utils.concurrency import gather_with_timeout
from saavn_artists.utils.errors import MalformedPayloadError, UpstreamUnavailableError
from saavn_artists.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def merge_results(results: list[SearchResult]) -> SearchResult:
    """Merge sub-results in order, first occurrence of each identity wins.

    ``total`` is the maximum reported total, or the merged artist count
    when no sub-result reports a positive total.
    """
    merged: dict[str, Artist] = {}
    for result in results:
        for artist in result.artists:
            merged.setdefault(artist.identity, artist)

    artists = list(merged.values())
    reported = [r.total for r in results if r.total > 0]
    total = max(reported) if reported else len(artists)
    return SearchResult(artists=artists, total=total)


class FanOutExecutor:
    """Runs the upstream calls a plan describes.

    Parameters
    ----------
    provider:
        The artist-search provider.
    page_size:
        Results per upstream page.
    timeout:
        Per-call deadline in seconds.
    concurrency:
        Maximum simultaneous upstream calls for one plan.
    """

    def __init__(
        self,
        provider: IArtistSearchProvider,
        page_size: int = 50,
        timeout: float = 10.0,
        concurrency: int = 5,
    ) -> None:
        self._provider = provider
        self._page_size = page_size
        self._timeout = timeout
        self._concurrency = concurrency

    @property
    def page_size(self) -> int:
        return self._page_size

    async def execute(self, plan: QueryPlan) -> SearchResult:
        """Fetch (and merge, for fan-out plans) the results for *plan*."""
        if not plan.merge_required or len(plan.sub_queries) == 1:
            return await self.fetch_single(plan.sub_queries[0], plan.language_context)
        return await self._fan_out(plan)

    async def fetch_single(self, sub_query: SubQuery, language_context: str | None) -> SearchResult:
        """One upstream call; timeouts surface as UpstreamUnavailableError.

        A page with artists but no reported total is given the count of
        artists seen up to and including this page.
        """
        try:
            result = await asyncio.wait_for(
                self._call(sub_query, language_context),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise UpstreamUnavailableError(
                message=f"Search for '{sub_query.text}' page {sub_query.page} timed out",
                provider_name=self._provider.get_provider_name(),
            ) from exc
        return self._with_derived_total(result, sub_query.page)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _with_derived_total(self, result: SearchResult, page: int) -> SearchResult:
        if result.total > 0 or not result.artists:
            return result
        seen = (page - 1) * self._page_size + len(result.artists)
        return result.model_copy(update={"total": seen})

    def _call(self, sub_query: SubQuery, language_context: str | None):  # noqa: ANN202
        return self._provider.search_artists(
            query=sub_query.text,
            page=sub_query.page,
            page_size=self._page_size,
            language_context=language_context,
        )

    async def _fan_out(self, plan: QueryPlan) -> SearchResult:
        # A fresh semaphore per plan: the bound is per request, and the
        # semaphore must belong to the running loop.
        semaphore = asyncio.Semaphore(self._concurrency)
        outcomes = await gather_with_timeout(
            [self._call(sq, plan.language_context) for sq in plan.sub_queries],
            semaphore=semaphore,
            timeout=self._timeout,
        )

        succeeded: list[SearchResult] = []
        malformed: MalformedPayloadError | None = None
        for sub_query, outcome in zip(plan.sub_queries, outcomes):
            if isinstance(outcome, SearchResult):
                succeeded.append(outcome)
            elif isinstance(outcome, MalformedPayloadError):
                malformed = malformed or outcome
            elif isinstance(outcome, (UpstreamUnavailableError, asyncio.TimeoutError)):
                _logger.warning(
                    "fanout_subquery_failed",
                    query=sub_query.text,
                    page=sub_query.page,
                    error=str(outcome) or type(outcome).__name__,
                )
            elif isinstance(outcome, BaseException):
                raise outcome

        if malformed is not None:
            raise malformed
        if not succeeded:
            raise UpstreamUnavailableError(
                message=f"All {len(plan.sub_queries)} sub-queries for '{plan.search_text}' failed",
                provider_name=self._provider.get_provider_name(),
            )

        merged = merge_results(succeeded)
        _logger.info(
            "fanout_merged",
            search_text=plan.search_text,
            page=plan.page,
            subqueries=len(plan.sub_queries),
            succeeded=len(succeeded),
            artists=len(merged.artists),
            total=merged.total,
        )
        return merged
