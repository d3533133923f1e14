# =============================================================================
# saavn_artists/cli/search.py - One-shot artist search from the terminal
# =============================================================================
#
# Runs the same search path the API uses (planner → fan-out → shaper)
# against the live provider, without starting a server.  Useful for
# checking what a language bucket returns before changing the curated
# queries in config/config.yaml.
#
# Typical usage:
#   python -m saavn_artists.cli.search --language tamil
#   python -m saavn_artists.cli.search --name "anirudh" --page 2 --json
#   python -m saavn_artists.cli.search -l hindi --sort popularity --extended
#
# The --json flag prints the exact envelope the API would return.  Logging
# is raised to WARNING so the output is not interleaved with debug lines.
# =============================================================================

"""Standalone CLI for a single artist search.

Usage::

    python -m saavn_artists.cli.search --language tamil
    python -m saavn_artists.cli.search --name "shreya ghoshal" --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from saavn_artists.models.response import ArtistSearchResponse
from saavn_artists.utils.errors import SaavnArtistsError


def _format_text_output(response: ArtistSearchResponse) -> str:
    """Render the envelope as a compact text table."""
    lines: list[str] = []
    sep = "=" * 60
    lines.append(sep)
    lines.append(
        f"  query: {response.search_query}  |  language: {response.language}"
        f"  |  page {response.page}"
    )
    lines.append(f"  total: {response.total}  |  shown: {len(response.artists)}")
    lines.append(sep)
    for index, artist in enumerate(response.artists, start=1):
        role = f" ({artist.role})" if artist.role else ""
        popularity = f"  [{artist.popularity}]" if artist.popularity is not None else ""
        lines.append(f"{index:>3}. {artist.name}{role}{popularity}")
    if not response.artists:
        lines.append("  (no artists)")
    return "\n".join(lines)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="saavn-artists-search",
        description="Search JioSaavn artists by name and/or language.",
    )
    parser.add_argument("-n", "--name", help="Free-text artist name")
    parser.add_argument("-l", "--language", help="Language tag, e.g. tamil or hindi")
    parser.add_argument("-p", "--page", type=int, default=1, help="Page number (default 1)")
    parser.add_argument("--sort", choices=["popularity"], help="Sort order")
    parser.add_argument("--filter", action="store_true", help="Apply the language keyword filter")
    parser.add_argument("--extended", action="store_true", help="Include id, url and popularity")
    parser.add_argument("--json", action="store_true", help="Print the JSON envelope")
    args = parser.parse_args(argv)
    if args.page < 1:
        parser.error("--page must be a positive integer")
    return args


async def _run(args: argparse.Namespace) -> ArtistSearchResponse:
    # Deferred so --help stays fast.
    from saavn_artists.config.loader import load_config
    from saavn_artists.config.settings import Settings
    from saavn_artists.main import _build_all

    settings = Settings(prefetch_enabled=False, sweep_interval_seconds=0, sweep_probability=0)
    components = _build_all(settings, load_config(settings.config_path))
    try:
        return await components["search_service"].search(
            name=args.name,
            language=args.language,
            page=args.page,
            filter_language=args.filter or None,
            sort_by_popularity=True if args.sort == "popularity" else None,
            extended=args.extended,
        )
    finally:
        await components["http_client"].aclose()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from saavn_artists.utils.logging import configure_logging

    configure_logging(log_level="WARNING")

    try:
        response = asyncio.run(_run(args))
    except SaavnArtistsError as exc:
        print(json.dumps({"success": False, "error": exc.message}), file=sys.stderr)
        return 1

    if args.json:
        print(response.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    else:
        print(_format_text_output(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
