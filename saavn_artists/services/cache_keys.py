"""Cache key policy.

A key is ``<search text>_<language or "default">_<page>``.  Two requests
with the same effective search text, language and page share a key;
requests differing in any of the three do not.  No normalization happens
here: the planner lower-cases the language tag once before the key is
built, and the search text is used exactly as sent upstream.
"""

from __future__ import annotations

DEFAULT_LANGUAGE_SEGMENT = "default"


def build_cache_key(search_text: str, language: str | None, page: int) -> str:
    """Return the cache key for a (search text, language, page) triple."""
    return f"{search_text}_{language or DEFAULT_LANGUAGE_SEGMENT}_{page}"
