"""API middleware - CORS, request logging, and error handling.

Provides helpers and middleware classes to configure cross-origin
resource sharing, structured request logging (via structlog), and the
conversion of every failure into the ``{"success": false, "error": ...}``
envelope callers expect.

# ─── MIDDLEWARE EXECUTION ORDER ────────────────────────────────────────
#
# Starlette middleware is a stack (last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # added 1st → inner
#     app.add_middleware(RequestLoggingMiddleware)  # added 2nd → outer
#
# RequestLoggingMiddleware therefore logs the final status code, including
# errors ErrorHandlingMiddleware turned into JSON responses.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from saavn_artists.api.schemas import ErrorResponse
from saavn_artists.utils.errors import SaavnArtistsError
from saavn_artists.utils.logging import bind_request_context, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the standard error envelope."""
    body = ErrorResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``: the
        endpoint is public and read-only.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        bind_request_context(request_id=request_id)
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                query=str(request.url.query),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert escaped exceptions into the JSON error envelope.

    ``SaavnArtistsError`` subclasses carry their own status (400 for bad
    input, 502 for provider failures).  Anything else becomes a 500 with
    a generic message; details stay in the server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except SaavnArtistsError as exc:
            _logger.warning(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            return error_response(exc.http_status, exc.message)
        except Exception as exc:
            _logger.exception(
                "unhandled_error",
                error_type=type(exc).__name__,
                path=str(request.url.path),
            )
            return error_response(500, "Internal server error")


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report query-parameter validation failures as 400 with the error envelope."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "query")
        details.append(f"{location}: {error.get('msg', 'invalid value')}")
    message = "Invalid request parameters: " + "; ".join(details)
    _logger.info("request_validation_failed", path=str(request.url.path), detail=message)
    return error_response(400, message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the validation handler; FastAPI catches these before any middleware."""
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
