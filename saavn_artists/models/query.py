"""Query-plan models built fresh for every request by the QueryPlanner."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from saavn_artists.services.cache_keys import build_cache_key


class SubQuery(BaseModel):
    """One upstream call: a query string at a page number."""

    model_config = ConfigDict(frozen=True)

    text: str
    page: int = Field(ge=1)


class QueryPlan(BaseModel):
    """How a request is answered upstream.

    ``search_text`` is the effective query the request is keyed and
    reported under; for a fan-out plan it differs from the curated
    sub-query strings.  ``language`` is the resolved (lower-cased,
    recognised) tag or ``None``.
    """

    model_config = ConfigDict(frozen=True)

    search_text: str
    language: str | None = None
    page: int = Field(default=1, ge=1)
    sub_queries: tuple[SubQuery, ...]
    merge_required: bool = False
    language_context: str | None = None

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.search_text, self.language, self.page)

    def for_page(self, page: int) -> QueryPlan:
        """Single-query plan for another page of the same effective query.

        Used by the prefetch scheduler, which never fans out.
        """
        return QueryPlan(
            search_text=self.search_text,
            language=self.language,
            page=page,
            sub_queries=(SubQuery(text=self.search_text, page=page),),
            merge_required=False,
            language_context=self.language_context,
        )
