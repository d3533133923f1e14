"""Custom exception hierarchy for saavn-artists.

All application exceptions inherit from :class:`SaavnArtistsError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "jiosaavn") caused the failure, and an
``http_status`` used by the API layer when the error reaches a caller.

The hierarchy is organized by where the failure originates:

    SaavnArtistsError  (base -- catch-all for any saavn-artists error)
    +-- UpstreamUnavailableError (network failure, timeout, HTTP error)
    |   +-- RateLimitError       (provider answered 429)
    +-- MalformedPayloadError    (provider body is not the expected JSON)
    +-- InvalidLanguageError     (unknown language tag under strict policy)
    +-- InvalidRequestError      (request parameters failed validation)
    +-- ConfigurationError       (startup / bad settings)

The fan-out executor relies on this split: an UpstreamUnavailableError in
one sub-query degrades to an empty contribution, while a
MalformedPayloadError always fails the request.
"""


class SaavnArtistsError(Exception):
    """Base exception for all saavn-artists errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[jiosaavn] Request timed out``.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream provider errors
# ---------------------------------------------------------------------------

class UpstreamUnavailableError(SaavnArtistsError):
    """Raised when the search provider is unreachable, times out, or errors.

    Inside a fan-out plan the executor catches this and treats the
    sub-query as an empty contribution; in a single-query plan it
    becomes a request failure.
    """

    http_status = 502

    def __init__(
        self,
        message: str = "Upstream search provider is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(UpstreamUnavailableError):
    """Raised when the provider rejects a request with HTTP 429."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MalformedPayloadError(SaavnArtistsError):
    """Raised when the provider body has no JSON object or fails to parse.

    Never downgraded to an empty result, not even inside a fan-out.
    """

    http_status = 502

    def __init__(
        self,
        message: str = "Upstream returned a malformed payload",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------

class InvalidLanguageError(SaavnArtistsError):
    """Raised for an unrecognised language tag when the strict policy is active."""

    http_status = 400

    def __init__(
        self,
        message: str = "Unsupported language",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidRequestError(SaavnArtistsError):
    """Raised when request parameters fail validation (e.g. page < 1)."""

    http_status = 400

    def __init__(
        self,
        message: str = "Invalid request parameters",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(SaavnArtistsError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
