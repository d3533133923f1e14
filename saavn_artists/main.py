"""saavn-artists FastAPI application entry point.

Wires the provider, cache, planner, executor, shaper and search service
together via dependency injection.  Loads configuration from ``.env`` and
``config/config.yaml``, configures structured logging, and owns the
lifecycle of the shared objects: built once at startup, stored on
``app.state``, torn down at shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from saavn_artists import __version__
from saavn_artists.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from saavn_artists.api.routes import router as api_router
from saavn_artists.config.languages import build_language_catalog
from saavn_artists.config.loader import load_config
from saavn_artists.config.settings import Settings
from saavn_artists.providers.cache.memory_cache import MemoryCacheProvider
from saavn_artists.providers.search.jiosaavn_provider import JioSaavnProvider
from saavn_artists.services.artist_search_service import ArtistSearchService
from saavn_artists.services.eviction_sweeper import EvictionSweeper
from saavn_artists.services.fanout_executor import FanOutExecutor
from saavn_artists.services.query_planner import QueryPlanner
from saavn_artists.services.response_shaper import ResponseShaper
from saavn_artists.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(
    app_settings: Settings,
    config: dict[str, Any] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    config = config or {}

    # -- Shared resources --
    if http_client is None:
        http_client = httpx.AsyncClient(
            timeout=app_settings.upstream_timeout_seconds,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )

    catalog = build_language_catalog(config.get("languages"))

    # -- Provider --
    provider = JioSaavnProvider(http_client=http_client, settings=app_settings)

    # -- Cache + eviction --
    cache = MemoryCacheProvider(
        ttl=app_settings.cache_ttl_seconds,
        max_size=app_settings.cache_max_entries,
    )
    sweeper = EvictionSweeper(
        cache=cache,
        interval=app_settings.sweep_interval_seconds,
        probability=app_settings.sweep_probability,
    )

    # -- Services --
    planner = QueryPlanner(
        catalog=catalog,
        default_query=app_settings.default_query,
        strategy=app_settings.language_strategy,
        policy=app_settings.language_policy,
        max_subqueries=app_settings.fanout_max_subqueries,
        max_fanout_page=app_settings.fanout_max_page,
    )
    executor = FanOutExecutor(
        provider=provider,
        page_size=app_settings.page_size,
        timeout=app_settings.upstream_timeout_seconds,
        concurrency=app_settings.fanout_concurrency,
    )
    shaper = ResponseShaper(
        catalog=catalog,
        page_size=app_settings.page_size,
        max_drop_ratio=app_settings.language_filter_max_drop_ratio,
    )
    search_service = ArtistSearchService(
        planner=planner,
        cache=cache,
        executor=executor,
        shaper=shaper,
        sweeper=sweeper,
        prefetch_enabled=app_settings.prefetch_enabled,
        filter_language=app_settings.language_filter_enabled,
        sort_by_popularity=app_settings.sort_by_popularity,
    )

    return {
        "http_client": http_client,
        "provider": provider,
        "cache": cache,
        "sweeper": sweeper,
        "search_service": search_service,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def _make_lifespan(app_settings: Settings, config: dict[str, Any]):  # noqa: ANN202
    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Build shared components on startup, release them on shutdown."""
        components = _build_all(app_settings, config)
        for key, value in components.items():
            setattr(application.state, key, value)

        sweeper: EvictionSweeper = components["sweeper"]
        sweeper.start()

        _logger.info(
            "app_startup",
            environment=app_settings.app_env,
            cache_ttl=app_settings.cache_ttl_seconds,
            language_strategy=app_settings.language_strategy,
            language_policy=app_settings.language_policy,
        )

        yield

        await components["search_service"].shutdown()
        await sweeper.stop()
        components["cache"].clear()
        http_client: httpx.AsyncClient = components["http_client"]
        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    return _lifespan


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    config: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or Settings()
    if config is None:
        config = load_config(app_settings.config_path)

    configure_logging(
        log_level=app_settings.log_level,
        json_output=(app_settings.app_env == "production"),
    )

    application = FastAPI(
        title="saavn-artists API",
        version=__version__,
        description=(
            "Paginated, language-bucketed artist search over the JioSaavn "
            "catalog, with a short-lived result cache and next-page prefetch."
        ),
        lifespan=_make_lifespan(app_settings, config),
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=app_settings.get_cors_origins())
    register_exception_handlers(application)

    application.include_router(api_router)
    return application


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    _settings = Settings()
    uvicorn.run(
        "saavn_artists.main:create_app",
        factory=True,
        host=_settings.app_host,
        port=_settings.app_port,
        reload=(_settings.app_env == "development"),
    )
