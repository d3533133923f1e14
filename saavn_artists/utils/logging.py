"""Structured logging setup using structlog.

One shared processor chain feeds either a coloured ConsoleRenderer (local
development) or a JSONRenderer (``APP_ENV=production`` or
``json_output=True``).  Standard-library loggers (uvicorn, httpx) are
routed through the same chain so every line has the same shape.

Two layers of context ride along on every event via contextvars:

    request   request_id, bound by the request middleware
    search    cache_key, language, page, strategy, bound around one search

A detached task (shared fetch, prefetch) copies the context at creation,
so upstream and prefetch lines still name the search that caused them.
"""

import contextlib
import logging
import os
import sys
from typing import Iterator

import structlog

SERVICE_NAME = "saavn-artists"

# Chatty third-party loggers held at WARNING: httpx logs every upstream
# request at INFO, which the provider already reports per search.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _add_service_name(
    _logger: object, _method: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    # contextvars first so request and search bindings precede the rest.
    return [
        structlog.contextvars.merge_contextvars,
        _add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer(json_output: bool) -> structlog.types.Processor:
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON lines even outside production.

    Returns:
        A configured structlog BoundLogger.
    """
    level = log_level.upper()
    shared = _shared_processors()
    renderer = _select_renderer(json_output)

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()


def bind_request_context(**values: object) -> None:
    """Start a fresh request scope: drop any previous bindings, bind *values*."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)


@contextlib.contextmanager
def search_log_context(
    cache_key: str,
    language: str | None,
    page: int,
    fanout: bool,
) -> Iterator[None]:
    """Bind one search's identity to every event logged inside the block.

    The request scope (``request_id``) is left alone and the search keys
    are restored to their previous values on exit.
    """
    with structlog.contextvars.bound_contextvars(
        cache_key=cache_key,
        language=language or "default",
        page=page,
        strategy="fanout" if fanout else "single",
    ):
        yield


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
