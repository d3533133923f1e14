"""FastAPI routes for the saavn-artists service.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint               Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/jiosaavn          GET     Artist search (path kept for old clients)
# /api/v1/artists        GET     Artist search
# /api/v1/health         GET     Health check
# /api/v1/cache/stats    GET     Result-cache and background-work counters
#
# Query parameters for the search endpoints:
#   q         free-text artist name
#   l         language tag (tamil, hindi, telugu, malayalam, kannada, english)
#   p         page number, >= 1 (default 1)
#   sort      "popularity" to order by the provider's popularity counter
#   filter    apply the language-keyword post-filter
#   extended  include id / url / popularity per artist
#
# Service objects are built once in main.py's lifespan and resolved from
# app.state through Depends().
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

import structlog
from fastapi import APIRouter, Depends, Query, Request

from saavn_artists import __version__
from saavn_artists.api.schemas import ArtistSearchResponse, CacheStatsResponse, HealthResponse
from saavn_artists.providers.cache.memory_cache import MemoryCacheProvider
from saavn_artists.services.artist_search_service import ArtistSearchService
from saavn_artists.services.eviction_sweeper import EvictionSweeper
from saavn_artists.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()

_VERSION = __version__


# ---------------------------------------------------------------------------
# Dependency injection helpers - resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_search_service(request: Request) -> ArtistSearchService:
    """Return the search service from application state."""
    return request.app.state.search_service


def _get_cache(request: Request) -> MemoryCacheProvider:
    """Return the result cache from application state."""
    return request.app.state.cache


def _get_sweeper(request: Request) -> EvictionSweeper | None:
    """Return the eviction sweeper from application state, or ``None``."""
    return getattr(request.app.state, "sweeper", None)


SearchServiceDep = Annotated[ArtistSearchService, Depends(_get_search_service)]
CacheDep = Annotated[MemoryCacheProvider, Depends(_get_cache)]
SweeperDep = Annotated[Any, Depends(_get_sweeper)]


# ---------------------------------------------------------------------------
# Search endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/api/jiosaavn",
    response_model=ArtistSearchResponse,
    response_model_exclude_none=True,
    summary="Search artists (legacy path)",
)
@router.get(
    "/api/v1/artists",
    response_model=ArtistSearchResponse,
    response_model_exclude_none=True,
    summary="Search artists",
)
async def search_artists(
    service: SearchServiceDep,
    q: Annotated[str | None, Query(max_length=200, description="Artist name")] = None,
    l: Annotated[str | None, Query(max_length=32, description="Language tag")] = None,  # noqa: E741
    p: Annotated[int, Query(ge=1, description="Page number")] = 1,
    sort: Annotated[Literal["popularity"] | None, Query()] = None,
    filter: Annotated[bool | None, Query(description="Language keyword filter")] = None,  # noqa: A002
    extended: Annotated[bool, Query(description="Include id/url/popularity")] = False,
) -> ArtistSearchResponse:
    """Return one page of artists, from the cache when possible."""
    return await service.search(
        name=q,
        language=l,
        page=p,
        filter_language=filter,
        sort_by_popularity=True if sort == "popularity" else None,
        extended=extended,
    )


# ---------------------------------------------------------------------------
# Operational endpoints
# ---------------------------------------------------------------------------


@router.get("/api/v1/health", response_model=HealthResponse)
async def health(service: SearchServiceDep) -> HealthResponse:
    """Liveness check; does not call the provider."""
    return HealthResponse(
        status="ok",
        version=_VERSION,
        provider="jiosaavn",
        languages=service.planner.supported_languages,
    )


@router.get("/api/v1/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(
    service: SearchServiceDep,
    cache: CacheDep,
    sweeper: SweeperDep,
) -> CacheStatsResponse:
    """Report cache occupancy and background work counters."""
    service_stats = service.stats()
    return CacheStatsResponse(
        cache=cache.stats(),
        sweeper=sweeper.stats() if sweeper is not None else {},
        prefetch_pending=service_stats["prefetch_pending"],
        in_flight=service_stats["in_flight"],
    )
