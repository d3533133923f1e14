"""Static language catalog used to bucket artist searches by language.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# The provider has no language filter for artist search, so language
# bucketing is approximated three ways:
#
#   - a language-biased search string ("tamil singer") for single-query
#     plans, prefetch, and the cache key;
#   - a handful of curated query strings per language that a fan-out plan
#     merges to broaden coverage beyond what one query returns;
#   - keywords the optional post-filter looks for in name or role.
#
# Any entry may be overridden from the ``languages`` block of
# config/config.yaml; see ``build_language_catalog``.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from saavn_artists.utils.errors import ConfigurationError


@dataclass(frozen=True)
class LanguageProfile:
    """Query strings and filter keywords for one language bucket."""

    tag: str
    biased_query: str
    curated_queries: tuple[str, ...]
    keywords: tuple[str, ...]


SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "tamil",
    "hindi",
    "telugu",
    "malayalam",
    "kannada",
    "english",
)

DEFAULT_LANGUAGE_PROFILES: dict[str, LanguageProfile] = {
    "tamil": LanguageProfile(
        tag="tamil",
        biased_query="tamil singer",
        curated_queries=(
            "tamil singer",
            "tamil playback singer",
            "tamil music director",
            "kollywood composer",
            "tamil rapper",
        ),
        keywords=("tamil", "kollywood"),
    ),
    "hindi": LanguageProfile(
        tag="hindi",
        biased_query="hindi singer",
        curated_queries=(
            "hindi singer",
            "bollywood playback singer",
            "hindi music director",
            "bollywood composer",
            "hindi indie artist",
        ),
        keywords=("hindi", "bollywood"),
    ),
    "telugu": LanguageProfile(
        tag="telugu",
        biased_query="telugu singer",
        curated_queries=(
            "telugu singer",
            "tollywood playback singer",
            "telugu music director",
            "tollywood composer",
        ),
        keywords=("telugu", "tollywood"),
    ),
    "malayalam": LanguageProfile(
        tag="malayalam",
        biased_query="malayalam singer",
        curated_queries=(
            "malayalam singer",
            "malayalam playback singer",
            "malayalam music director",
            "mollywood composer",
        ),
        keywords=("malayalam", "mollywood"),
    ),
    "kannada": LanguageProfile(
        tag="kannada",
        biased_query="kannada singer",
        curated_queries=(
            "kannada singer",
            "kannada playback singer",
            "kannada music director",
            "sandalwood composer",
        ),
        keywords=("kannada", "sandalwood"),
    ),
    "english": LanguageProfile(
        tag="english",
        biased_query="english singer",
        curated_queries=(
            "english singer",
            "pop singer",
            "rock band",
            "hip hop artist",
            "english songwriter",
        ),
        keywords=("english", "pop", "rock"),
    ),
}


def build_language_catalog(overrides: dict[str, Any] | None = None) -> dict[str, LanguageProfile]:
    """Return the language catalog with YAML overrides applied.

    Only the six supported tags are accepted; an override may replace any
    of ``biased_query``, ``curated_queries`` or ``keywords`` for a tag.

    Args:
        overrides: The ``languages`` block from config.yaml, e.g.
            ``{"tamil": {"curated_queries": ["tamil singer", "ilaiyaraaja"]}}``.

    Raises:
        ConfigurationError: For an unknown tag or an empty query list.
    """
    catalog = dict(DEFAULT_LANGUAGE_PROFILES)
    for tag, values in (overrides or {}).items():
        tag = str(tag).lower()
        if tag not in catalog:
            raise ConfigurationError(f"Unknown language in config: {tag!r}")
        if not isinstance(values, dict):
            raise ConfigurationError(f"Language override for {tag!r} must be a mapping")

        base = catalog[tag]
        curated = tuple(values.get("curated_queries", base.curated_queries))
        if not curated:
            raise ConfigurationError(f"Language {tag!r} needs at least one curated query")
        catalog[tag] = LanguageProfile(
            tag=tag,
            biased_query=str(values.get("biased_query", base.biased_query)),
            curated_queries=curated,
            keywords=tuple(values.get("keywords", base.keywords)),
        )
    return catalog
