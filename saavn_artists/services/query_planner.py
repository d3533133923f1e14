"""Query planning: decide which upstream calls answer a request.

Decision table (first matching row wins):

    name given                     -> one sub-query: name [+ language hint]
    recognised language, fan-out   -> up to N curated queries, merged
    recognised language, single    -> one language-biased query
    nothing usable                 -> one default catch-all query

An unrecognised language tag is either rejected (strict policy) or
dropped (lenient policy), as configured.  The planner lower-cases the tag
exactly once; the cache key is built from its output unchanged.
"""

from __future__ import annotations

from typing import Literal

from saavn_artists.config.languages import LanguageProfile
from saavn_artists.models.query import QueryPlan, SubQuery
from saavn_artists.utils.errors import InvalidLanguageError, InvalidRequestError
from saavn_artists.utils.logging import get_logger

LanguagePolicy = Literal["lenient", "strict"]
LanguageStrategy = Literal["fanout", "single"]


class QueryPlanner:
    """Builds a :class:`QueryPlan` from the parsed request parameters.

    Parameters
    ----------
    catalog:
        Language tag → :class:`LanguageProfile`.
    default_query:
        Catch-all search string used when neither a name nor a language
        is supplied.
    strategy:
        ``"fanout"`` merges curated queries for language-only requests;
        ``"single"`` sends the language-biased query alone.
    policy:
        ``"strict"`` raises :class:`InvalidLanguageError` for unknown tags;
        ``"lenient"`` ignores them.
    max_subqueries:
        Upper bound on the fan-out width.
    max_fanout_page:
        Pages beyond this are served by the single language-biased query.
    """

    def __init__(
        self,
        catalog: dict[str, LanguageProfile],
        default_query: str = "artist",
        strategy: LanguageStrategy = "fanout",
        policy: LanguagePolicy = "lenient",
        max_subqueries: int = 5,
        max_fanout_page: int = 10,
    ) -> None:
        self._catalog = catalog
        self._default_query = default_query
        self._strategy = strategy
        self._policy = policy
        self._max_subqueries = max_subqueries
        self._max_fanout_page = max_fanout_page
        self._logger = get_logger(__name__)

    @property
    def supported_languages(self) -> list[str]:
        return sorted(self._catalog)

    def resolve_language(self, language: str | None) -> str | None:
        """Return the recognised, lower-cased tag or ``None``.

        Raises:
            InvalidLanguageError: Unknown tag under the strict policy.
        """
        if language is None:
            return None
        tag = language.strip().lower()
        if not tag:
            return None
        if tag in self._catalog:
            return tag
        if self._policy == "strict":
            raise InvalidLanguageError(
                message=(
                    f"Unsupported language '{language}'. "
                    f"Expected one of: {', '.join(self.supported_languages)}"
                ),
            )
        self._logger.info("unknown_language_ignored", language=language)
        return None

    def plan(self, name: str | None, language: str | None, page: int = 1) -> QueryPlan:
        """Build the plan for one request."""
        if page < 1:
            raise InvalidRequestError(message="Page must be a positive integer")

        tag = self.resolve_language(language)
        name = (name or "").strip()

        if name:
            text = name
            if tag is not None:
                hint = self._catalog[tag].tag
                if hint not in name.lower():
                    text = f"{name} {hint}"
            return self._single(text, tag, page)

        if tag is not None:
            profile = self._catalog[tag]
            if self._strategy == "fanout" and page <= self._max_fanout_page:
                return self._fanout(profile, page)
            return self._single(profile.biased_query, tag, page)

        return self._single(self._default_query, None, page)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _single(text: str, tag: str | None, page: int) -> QueryPlan:
        return QueryPlan(
            search_text=text,
            language=tag,
            page=page,
            sub_queries=(SubQuery(text=text, page=page),),
            merge_required=False,
            language_context=tag,
        )

    def _fanout(self, profile: LanguageProfile, page: int) -> QueryPlan:
        # Keep the biased query first so its artists win ties in the merge.
        ordered: list[str] = [profile.biased_query]
        for query in profile.curated_queries:
            if query not in ordered:
                ordered.append(query)
        queries = ordered[: self._max_subqueries]

        return QueryPlan(
            search_text=profile.biased_query,
            language=profile.tag,
            page=page,
            sub_queries=tuple(SubQuery(text=q, page=page) for q in queries),
            merge_required=len(queries) > 1,
            language_context=profile.tag,
        )
