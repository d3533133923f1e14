"""saavn-artists API layer - schemas and middleware.

Routes live in :mod:`saavn_artists.api.routes` and are not re-exported
here, so importing the schemas or middleware does not build the service
layer.
"""

from saavn_artists.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    error_response,
    register_exception_handlers,
)
from saavn_artists.api.schemas import (
    ArtistOut,
    ArtistSearchResponse,
    CacheStatsResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ArtistOut",
    "ArtistSearchResponse",
    "CacheStatsResponse",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "configure_cors",
    "error_response",
    "register_exception_handlers",
]
