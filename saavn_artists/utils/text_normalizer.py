"""Text normalization utilities for artist names and language keywords.

Two concerns live here:

1. **Identity normalization** -- the provider returns the same artist from
   several curated queries with inconsistent spacing and capitalisation
   ("A.R. Rahman", " a.r. rahman "), so deduplication compares a
   casefolded, trimmed, whitespace-collapsed form.

2. **Keyword matching** -- the language post-filter checks whether an
   artist's name or role mentions one of a small keyword list.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_artist_name(name: str) -> str:
    """Normalize an artist name for identity comparison.

    Trims, collapses internal whitespace, and casefolds, so that
    ``"  Shreya  Ghoshal"`` and ``"shreya ghoshal"`` compare equal.

    Args:
        name: Raw artist name string.

    Returns:
        Normalized name; empty string for blank input.
    """
    return _WHITESPACE_RE.sub(" ", name.strip()).casefold()


def contains_any_keyword(text: str, keywords: tuple[str, ...] | list[str]) -> bool:
    """Return ``True`` if *text* contains any keyword (case-insensitive)."""
    if not text:
        return False
    haystack = text.casefold()
    return any(keyword.casefold() in haystack for keyword in keywords)
