"""Artist-search provider implementations.

JioSaavnProvider is the only upstream.  It returns the same SearchResult
type the cache stores, so the fan-out executor can merge its pages
directly.
"""

from saavn_artists.providers.search.jiosaavn_provider import JioSaavnProvider, extract_json_body

__all__ = ["JioSaavnProvider", "extract_json_body"]
