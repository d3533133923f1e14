"""Artist search orchestration: plan, cache, fetch, prefetch, shape.

One call to :meth:`ArtistSearchService.search` runs the whole request path:

    1. QueryPlanner builds the plan (and its cache key)
    2. cache lookup; a fresh entry is shaped and returned immediately
    3. on a miss, one shared fetch per key (single-flight), written to cache
    4. prefetch of page + 1 is scheduled, a sweep may be scheduled
    5. ResponseShaper builds the envelope

Concurrent misses on the same key await a single upstream fetch instead of
issuing duplicates.  The in-flight registry only holds request fetches;
prefetches consult it but never join it, so a failing prefetch can never
fail a request.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from saavn_artists.interfaces.cache_provider import ICacheProvider
from saavn_artists.models.artist import SearchResult
from saavn_artists.models.query import QueryPlan
from saavn_artists.models.response import ArtistSearchResponse
from saavn_artists.services.eviction_sweeper import EvictionSweeper
from saavn_artists.services.fanout_executor import FanOutExecutor
from saavn_artists.services.prefetch_scheduler import PrefetchScheduler
from saavn_artists.services.query_planner import QueryPlanner
from saavn_artists.services.response_shaper import ResponseShaper
from saavn_artists.utils.logging import get_logger, search_log_context

_logger: structlog.BoundLogger = get_logger(__name__)


class ArtistSearchService:
    """Answers artist searches from the cache or the provider.

    Built once per process by the application lifespan and shared by all
    requests; the cache is the only state mutated across requests.  The
    prefetch scheduler is created here so it can see the in-flight
    registry.
    """

    def __init__(
        self,
        planner: QueryPlanner,
        cache: ICacheProvider,
        executor: FanOutExecutor,
        shaper: ResponseShaper,
        sweeper: EvictionSweeper | None = None,
        prefetch_enabled: bool = True,
        filter_language: bool = False,
        sort_by_popularity: bool = False,
    ) -> None:
        self._planner = planner
        self._cache = cache
        self._executor = executor
        self._shaper = shaper
        self._sweeper = sweeper
        self._filter_language = filter_language
        self._sort_by_popularity = sort_by_popularity
        self._in_flight: dict[str, asyncio.Task[SearchResult]] = {}
        self.prefetcher = PrefetchScheduler(
            cache=cache,
            executor=executor,
            is_in_flight=self.is_in_flight,
            enabled=prefetch_enabled,
        )

    @property
    def planner(self) -> QueryPlanner:
        return self._planner

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def is_in_flight(self, key: str) -> bool:
        return key in self._in_flight

    async def search(
        self,
        name: str | None = None,
        language: str | None = None,
        page: int = 1,
        *,
        filter_language: bool | None = None,
        sort_by_popularity: bool | None = None,
        extended: bool = False,
    ) -> ArtistSearchResponse:
        """Run one search request end to end.

        Raises:
            InvalidLanguageError: Unknown language under the strict policy.
            InvalidRequestError: Page below 1.
            UpstreamUnavailableError: The provider could not answer.
            MalformedPayloadError: The provider answered with junk.
        """
        plan = self._planner.plan(name, language, page)
        key = plan.cache_key

        with search_log_context(key, plan.language, plan.page, plan.merge_required):
            lookup = await self._cache.lookup(key)
            if lookup.fresh:
                payload: SearchResult = lookup.payload
                cached = True
                _logger.info("search_cache_hit")
            else:
                payload = await self._load(key, plan)
                cached = False
                if self._sweeper is not None:
                    self._sweeper.maybe_sweep()
            # Scheduled inside the block so the prefetch task keeps the request id.
            self.prefetcher.schedule(plan, total=payload.total, returned=len(payload.artists))

        response = self._shaper.shape(
            plan,
            payload,
            cached=cached,
            filter_language=self._filter_language if filter_language is None else filter_language,
            sort_by_popularity=(
                self._sort_by_popularity if sort_by_popularity is None else sort_by_popularity
            ),
            extended=extended,
        )
        return response

    async def shutdown(self) -> None:
        """Cancel background prefetches.  In-flight request fetches finish on their own."""
        await self.prefetcher.shutdown()

    def stats(self) -> dict[str, Any]:
        return {"in_flight": self.in_flight, "prefetch_pending": self.prefetcher.pending}

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _load(self, key: str, plan: QueryPlan) -> SearchResult:
        """Fetch *plan* once per key, sharing the result with concurrent callers."""
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._fetch_and_store(key, plan))
            self._in_flight[key] = task
            task.add_done_callback(lambda t: self._release(key, t))
        else:
            _logger.debug("search_joined_in_flight", key=key)
        # shield: a caller disconnecting must not cancel the fetch others await.
        return await asyncio.shield(task)

    async def _fetch_and_store(self, key: str, plan: QueryPlan) -> SearchResult:
        _logger.info(
            "search_cache_miss",
            key=key,
            subqueries=len(plan.sub_queries),
            merge=plan.merge_required,
        )
        result = await self._executor.execute(plan)
        await self._cache.set(key, result)
        return result

    def _release(self, key: str, task: asyncio.Task[SearchResult]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the exception retrieved when every waiter has gone away.
        if not task.cancelled():
            task.exception()
