"""JioSaavn provider implementing IArtistSearchProvider.

Calls the public ``api.php`` endpoint with ``__call=search.getArtistResults``.
The endpoint answers with JSON preceded by junk bytes (an HTML comment or
whitespace, depending on the edge node), so the body is cut at the first
``{`` before parsing.  No API key is required.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from saavn_artists.config.settings import Settings
from saavn_artists.interfaces.artist_search_provider import IArtistSearchProvider
from saavn_artists.models.artist import Artist, SearchResult
from saavn_artists.utils.errors import (
    MalformedPayloadError,
    RateLimitError,
    UpstreamUnavailableError,
)
from saavn_artists.utils.logging import get_logger

_PROVIDER_NAME = "jiosaavn"

# Fixed query-string parameters of the artist-search call.
_STATIC_PARAMS: dict[str, str] = {
    "_format": "json",
    "_marker": "0",
    "api_version": "4",
    "ctx": "wap6dot0",
    "__call": "search.getArtistResults",
}

# Counters the provider has used for popularity, in order of preference.
_POPULARITY_FIELDS = ("ctr", "play_count", "follower_count")


def extract_json_body(raw: str) -> dict[str, Any]:
    """Strip the leading junk from *raw* and parse the JSON object.

    Raises:
        MalformedPayloadError: If *raw* has no ``{``, the remainder is not
            valid JSON, or it decodes to something other than an object.
    """
    start = raw.find("{")
    if start == -1:
        raise MalformedPayloadError(
            message="Response contained no JSON object",
            provider_name=_PROVIDER_NAME,
        )
    try:
        data = json.loads(raw[start:])
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError(
            message=f"Response JSON could not be parsed: {exc.msg}",
            provider_name=_PROVIDER_NAME,
        ) from exc
    if not isinstance(data, dict):
        raise MalformedPayloadError(
            message="Response JSON was not an object",
            provider_name=_PROVIDER_NAME,
        )
    return data


class JioSaavnProvider(IArtistSearchProvider):
    """Artist search backed by the JioSaavn web API.

    The shared ``httpx.AsyncClient`` is owned by the application lifespan;
    this adapter never closes it.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._base_url = settings.upstream_base_url
        self._timeout = settings.upstream_timeout_seconds
        self._user_agent = settings.upstream_user_agent
        self._logger = get_logger(__name__)

    # -- IArtistSearchProvider implementation ---------------------------------

    async def search_artists(
        self,
        query: str,
        page: int,
        page_size: int,
        language_context: str | None = None,
    ) -> SearchResult:
        params = {"p": str(page), "q": query, "n": str(page_size), **_STATIC_PARAMS}
        headers = {"User-Agent": self._user_agent, "Accept": "application/json"}
        if language_context:
            # The site keys its language preference off the "L" cookie.
            headers["Cookie"] = f"L={language_context}"

        try:
            response = await self._http.get(
                self._base_url,
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(
                message=f"Search for '{query}' page {page} timed out",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(
                message=f"Search for '{query}' page {page} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if response.status_code == 429:
            raise RateLimitError(
                message="JioSaavn rate limit exceeded",
                provider_name=_PROVIDER_NAME,
            )
        if response.status_code >= 400:
            raise UpstreamUnavailableError(
                message=f"JioSaavn returned HTTP {response.status_code}",
                provider_name=_PROVIDER_NAME,
            )

        data = extract_json_body(response.text)
        result = self._parse_results(data)

        self._logger.debug(
            "jiosaavn_search_complete",
            query=query,
            page=page,
            results=len(result.artists),
            total=result.total,
        )
        return result

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    # -- Parsing ---------------------------------------------------------------

    @classmethod
    def _parse_results(cls, data: dict[str, Any]) -> SearchResult:
        raw_results = data.get("results") or []
        if not isinstance(raw_results, list):
            raise MalformedPayloadError(
                message="'results' was not a list",
                provider_name=_PROVIDER_NAME,
            )

        artists: list[Artist] = []
        for item in raw_results:
            if not isinstance(item, dict):
                continue
            artist = cls._map_artist(item)
            if artist is not None:
                artists.append(artist)

        total = cls._to_int(data.get("total"))
        return SearchResult(artists=artists, total=total)

    @classmethod
    def _map_artist(cls, item: dict[str, Any]) -> Artist | None:
        """Map a raw provider record to an :class:`Artist`; skip nameless ones."""
        name = str(item.get("name") or "").strip()
        if not name:
            return None

        raw_id = item.get("id")
        popularity = 0
        for field in _POPULARITY_FIELDS:
            if item.get(field) not in (None, ""):
                popularity = cls._to_int(item.get(field))
                break

        return Artist(
            id=str(raw_id) if raw_id not in (None, "") else None,
            name=name,
            role=str(item.get("role") or ""),
            image=str(item.get("image") or ""),
            profile_url=item.get("perma_url") or None,
            popularity=popularity,
        )

    @staticmethod
    def _to_int(value: Any) -> int:
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            return 0
