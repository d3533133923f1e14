"""Unit tests for the JioSaavn provider and its body parser.

All HTTP calls go through a mocked ``httpx.AsyncClient``; nothing leaves
the process.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from saavn_artists.config.settings import Settings
from saavn_artists.providers.search.jiosaavn_provider import (
    JioSaavnProvider,
    extract_json_body,
)
from saavn_artists.utils.errors import (
    MalformedPayloadError,
    RateLimitError,
    UpstreamUnavailableError,
)


def _mock_response(text: str, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


def _provider_with(response: Any = None, side_effect: Any = None) -> tuple[JioSaavnProvider, MagicMock]:
    mock_client = MagicMock(spec=httpx.AsyncClient)
    if side_effect is not None:
        mock_client.get = AsyncMock(side_effect=side_effect)
    else:
        mock_client.get = AsyncMock(return_value=response)
    settings = Settings(upstream_timeout_seconds=3.0, upstream_user_agent="test-agent")
    return JioSaavnProvider(http_client=mock_client, settings=settings), mock_client


# ======================================================================
# extract_json_body
# ======================================================================


class TestExtractJsonBody:
    def test_strips_leading_junk(self) -> None:
        raw = '<!-- edge-7 -->\n  {"total": 3, "results": []}'
        assert extract_json_body(raw) == {"total": 3, "results": []}

    def test_plain_json(self) -> None:
        assert extract_json_body('{"a": 1}') == {"a": 1}

    def test_no_brace_is_malformed(self) -> None:
        with pytest.raises(MalformedPayloadError):
            extract_json_body("<html>Service Unavailable</html>")

    def test_invalid_json_is_malformed(self) -> None:
        with pytest.raises(MalformedPayloadError):
            extract_json_body('junk {"results": [')

    def test_empty_body_is_malformed(self) -> None:
        with pytest.raises(MalformedPayloadError):
            extract_json_body("")


# ======================================================================
# JioSaavnProvider.search_artists
# ======================================================================


class TestJioSaavnProvider:
    @pytest.mark.asyncio
    async def test_maps_records(self, sample_payload: dict[str, Any]) -> None:
        provider, _ = _provider_with(_mock_response("\n" + json.dumps(sample_payload)))

        result = await provider.search_artists("tamil singer", page=1, page_size=50)

        assert result.total == 120
        assert [a.name for a in result.artists] == ["A. R. Rahman", "Anirudh Ravichander"]
        rahman = result.artists[0]
        assert rahman.id == "455130"
        assert rahman.role == "music_director"
        assert rahman.image.endswith("AR_Rahman_150x150.jpg")
        assert rahman.profile_url.startswith("https://www.jiosaavn.com/artist/")
        assert rahman.popularity == 3120
        assert result.artists[1].popularity == 8800

    @pytest.mark.asyncio
    async def test_request_parameters(self) -> None:
        provider, client = _provider_with(_mock_response('{"results": [], "total": 0}'))

        await provider.search_artists("hindi singer", page=3, page_size=50, language_context="hindi")

        call = client.get.call_args
        params = call.kwargs["params"]
        assert params["q"] == "hindi singer"
        assert params["p"] == "3"
        assert params["n"] == "50"
        assert params["__call"] == "search.getArtistResults"
        assert params["_format"] == "json"
        assert params["api_version"] == "4"
        assert call.kwargs["headers"]["Cookie"] == "L=hindi"
        assert call.kwargs["headers"]["User-Agent"] == "test-agent"
        assert call.kwargs["timeout"] == 3.0

    @pytest.mark.asyncio
    async def test_no_cookie_without_language(self) -> None:
        provider, client = _provider_with(_mock_response('{"results": []}'))
        await provider.search_artists("artist", page=1, page_size=50)
        assert "Cookie" not in client.get.call_args.kwargs["headers"]

    @pytest.mark.asyncio
    async def test_skips_nameless_and_non_object_records(self) -> None:
        body = json.dumps(
            {"total": "7", "results": [{"name": ""}, "junk", {"name": "Sid Sriram"}]}
        )
        provider, _ = _provider_with(_mock_response(body))

        result = await provider.search_artists("x", page=1, page_size=50)

        assert [a.name for a in result.artists] == ["Sid Sriram"]
        assert result.artists[0].id is None
        assert result.total == 7

    @pytest.mark.asyncio
    async def test_missing_results_is_empty(self) -> None:
        provider, _ = _provider_with(_mock_response("{}"))
        result = await provider.search_artists("x", page=9, page_size=50)
        assert result.artists == []
        assert result.total == 0

    @pytest.mark.asyncio
    async def test_results_not_a_list_is_malformed(self) -> None:
        provider, _ = _provider_with(_mock_response('{"results": "nope"}'))
        with pytest.raises(MalformedPayloadError):
            await provider.search_artists("x", page=1, page_size=50)

    @pytest.mark.asyncio
    async def test_garbage_body_is_malformed(self) -> None:
        provider, _ = _provider_with(_mock_response("Bad gateway"))
        with pytest.raises(MalformedPayloadError) as exc_info:
            await provider.search_artists("x", page=1, page_size=50)
        assert exc_info.value.provider_name == "jiosaavn"

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self) -> None:
        provider, _ = _provider_with(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(UpstreamUnavailableError, match="timed out"):
            await provider.search_artists("x", page=1, page_size=50)

    @pytest.mark.asyncio
    async def test_connection_error_is_unavailable(self) -> None:
        provider, _ = _provider_with(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(UpstreamUnavailableError):
            await provider.search_artists("x", page=1, page_size=50)

    @pytest.mark.asyncio
    async def test_rate_limit(self) -> None:
        provider, _ = _provider_with(_mock_response("", status_code=429))
        with pytest.raises(RateLimitError):
            await provider.search_artists("x", page=1, page_size=50)

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self) -> None:
        provider, _ = _provider_with(_mock_response("oops", status_code=503))
        with pytest.raises(UpstreamUnavailableError, match="HTTP 503"):
            await provider.search_artists("x", page=1, page_size=50)

    def test_provider_name(self) -> None:
        provider, _ = _provider_with(_mock_response("{}"))
        assert provider.get_provider_name() == "jiosaavn"
