"""Unit tests for QueryPlanner - the request-to-plan decision table."""

from __future__ import annotations

import pytest

from saavn_artists.config.languages import LanguageProfile
from saavn_artists.services.query_planner import QueryPlanner
from saavn_artists.utils.errors import InvalidLanguageError, InvalidRequestError


@pytest.fixture()
def planner(catalog: dict[str, LanguageProfile]) -> QueryPlanner:
    return QueryPlanner(catalog=catalog, default_query="artist")


class TestNamePlans:
    def test_name_only_is_single_query(self, planner: QueryPlanner) -> None:
        plan = planner.plan("Anirudh", None, 1)
        assert plan.search_text == "Anirudh"
        assert plan.language is None
        assert plan.merge_required is False
        assert [sq.text for sq in plan.sub_queries] == ["Anirudh"]
        assert plan.cache_key == "Anirudh_default_1"

    def test_name_with_language_appends_hint(self, planner: QueryPlanner) -> None:
        plan = planner.plan("sid sriram", "Tamil", 2)
        assert plan.search_text == "sid sriram tamil"
        assert plan.language == "tamil"
        assert plan.language_context == "tamil"
        assert plan.sub_queries[0].page == 2

    def test_hint_not_duplicated(self, planner: QueryPlanner) -> None:
        plan = planner.plan("Tamil Rapper", "tamil", 1)
        assert plan.search_text == "Tamil Rapper"

    def test_name_is_trimmed(self, planner: QueryPlanner) -> None:
        assert planner.plan("  Anirudh  ", None, 1).search_text == "Anirudh"

    def test_blank_name_counts_as_absent(self, planner: QueryPlanner) -> None:
        assert planner.plan("   ", None, 1).search_text == "artist"


class TestLanguagePlans:
    def test_language_only_fans_out(self, planner: QueryPlanner) -> None:
        plan = planner.plan(None, "tamil", 1)
        assert plan.merge_required is True
        assert plan.search_text == "tamil singer"
        assert plan.cache_key == "tamil singer_tamil_1"
        texts = [sq.text for sq in plan.sub_queries]
        assert texts[0] == "tamil singer"
        assert len(texts) == len(set(texts))
        assert len(texts) <= 5
        assert all(sq.page == 1 for sq in plan.sub_queries)

    def test_fanout_width_is_capped(self, catalog: dict[str, LanguageProfile]) -> None:
        planner = QueryPlanner(catalog=catalog, max_subqueries=2)
        plan = planner.plan(None, "hindi", 1)
        assert len(plan.sub_queries) == 2

    def test_width_one_is_not_a_merge(self, catalog: dict[str, LanguageProfile]) -> None:
        planner = QueryPlanner(catalog=catalog, max_subqueries=1)
        plan = planner.plan(None, "hindi", 1)
        assert plan.merge_required is False
        assert [sq.text for sq in plan.sub_queries] == ["hindi singer"]

    def test_single_strategy_uses_biased_query(
        self, catalog: dict[str, LanguageProfile]
    ) -> None:
        planner = QueryPlanner(catalog=catalog, strategy="single")
        plan = planner.plan(None, "telugu", 3)
        assert plan.merge_required is False
        assert [sq.text for sq in plan.sub_queries] == ["telugu singer"]
        assert plan.cache_key == "telugu singer_telugu_3"

    def test_deep_pages_fall_back_to_single(self, catalog: dict[str, LanguageProfile]) -> None:
        planner = QueryPlanner(catalog=catalog, max_fanout_page=2)
        assert planner.plan(None, "tamil", 2).merge_required is True
        deep = planner.plan(None, "tamil", 3)
        assert deep.merge_required is False
        assert deep.cache_key == "tamil singer_tamil_3"

    def test_fanout_and_single_share_the_cache_key(
        self, catalog: dict[str, LanguageProfile]
    ) -> None:
        fanout = QueryPlanner(catalog=catalog).plan(None, "kannada", 1)
        single = QueryPlanner(catalog=catalog, strategy="single").plan(None, "kannada", 1)
        assert fanout.cache_key == single.cache_key


class TestDefaultPlan:
    def test_nothing_given(self, planner: QueryPlanner) -> None:
        plan = planner.plan(None, None, 1)
        assert plan.search_text == "artist"
        assert plan.language is None
        assert plan.language_context is None
        assert plan.cache_key == "artist_default_1"

    def test_invalid_page(self, planner: QueryPlanner) -> None:
        with pytest.raises(InvalidRequestError):
            planner.plan(None, None, 0)


class TestLanguagePolicy:
    def test_lenient_ignores_unknown_language(self, planner: QueryPlanner) -> None:
        plan = planner.plan(None, "klingon", 1)
        assert plan.language is None
        assert plan.search_text == "artist"

    def test_strict_rejects_unknown_language(
        self, catalog: dict[str, LanguageProfile]
    ) -> None:
        planner = QueryPlanner(catalog=catalog, policy="strict")
        with pytest.raises(InvalidLanguageError) as exc_info:
            planner.plan(None, "klingon", 1)
        assert "klingon" in exc_info.value.message
        assert exc_info.value.http_status == 400

    def test_language_is_case_insensitive(self, planner: QueryPlanner) -> None:
        assert planner.resolve_language(" HINDI ") == "hindi"

    def test_empty_language_is_none(self, planner: QueryPlanner) -> None:
        assert planner.resolve_language("") is None

    def test_supported_languages_sorted(self, planner: QueryPlanner) -> None:
        assert planner.supported_languages == [
            "english", "hindi", "kannada", "malayalam", "tamil", "telugu",
        ]
