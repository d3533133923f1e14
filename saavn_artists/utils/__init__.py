"""Utility modules for saavn-artists.

- **errors** -- Domain exception hierarchy rooted at SaavnArtistsError;
  each subclass carries the HTTP status the API layer reports for it.
- **concurrency** -- semaphore-throttled gather helpers used by the
  fan-out executor to keep parallel provider calls under rate limits.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- artist identity normalization and keyword matching.
"""

from saavn_artists.utils.concurrency import gather_with_timeout, throttled_gather
from saavn_artists.utils.errors import (
    ConfigurationError,
    InvalidLanguageError,
    InvalidRequestError,
    MalformedPayloadError,
    RateLimitError,
    SaavnArtistsError,
    UpstreamUnavailableError,
)
from saavn_artists.utils.logging import (
    bind_request_context,
    configure_logging,
    get_logger,
    search_log_context,
)
from saavn_artists.utils.text_normalizer import contains_any_keyword, normalize_artist_name

__all__ = [
    "ConfigurationError",
    "InvalidLanguageError",
    "InvalidRequestError",
    "MalformedPayloadError",
    "RateLimitError",
    "SaavnArtistsError",
    "UpstreamUnavailableError",
    "bind_request_context",
    "configure_logging",
    "contains_any_keyword",
    "gather_with_timeout",
    "get_logger",
    "normalize_artist_name",
    "search_log_context",
    "throttled_gather",
]
