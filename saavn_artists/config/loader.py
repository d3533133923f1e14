"""YAML configuration loader.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Two sources, each owning its own keys:
#
#   1. Settings (env vars, .env) - every scalar tunable: timeouts, TTL,
#      fan-out width, host and port
#   2. config/config.yaml        - structured data that does not fit in an
#      env var, i.e. the per-language query catalog
#
# Nothing is merged across the two.  A scalar section left in the YAML file
# would never be read, so unknown top-level sections are rejected.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path
from typing import Any

import yaml

from saavn_artists.utils.errors import ConfigurationError

KNOWN_SECTIONS = frozenset({"languages"})


def load_config(path: str = "config/config.yaml") -> dict[str, Any]:
    """Load the YAML config file.

    A missing or empty file yields ``{}``, so the built-in language
    profiles apply unchanged.

    Raises:
        ConfigurationError: The file is not a mapping, or it carries a
            top-level section other than ``languages``.
    """
    config_path = Path(path)
    if not config_path.exists():
        return {}

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    unknown = sorted(set(config) - KNOWN_SECTIONS)
    if unknown:
        raise ConfigurationError(
            f"{path}: unsupported section(s) {', '.join(unknown)}; "
            "scalar settings come from the environment"
        )
    return config
