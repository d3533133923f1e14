"""Unit tests for artist-name normalization and keyword matching."""

from __future__ import annotations

from saavn_artists.utils.text_normalizer import contains_any_keyword, normalize_artist_name


class TestNormalizeArtistName:
    def test_trims_and_casefolds(self) -> None:
        assert normalize_artist_name("  Sid Sriram ") == "sid sriram"

    def test_collapses_internal_whitespace(self) -> None:
        assert normalize_artist_name("A.R.\t  Rahman") == "a.r. rahman"

    def test_blank(self) -> None:
        assert normalize_artist_name("   ") == ""


class TestContainsAnyKeyword:
    def test_case_insensitive_substring(self) -> None:
        assert contains_any_keyword("Kollywood Composer", ("kollywood",)) is True

    def test_no_match(self) -> None:
        assert contains_any_keyword("Singer", ("tamil", "kollywood")) is False

    def test_empty_text(self) -> None:
        assert contains_any_keyword("", ("tamil",)) is False
