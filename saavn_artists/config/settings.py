"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (in priority order):
#
#   1. **Environment variables** - e.g., CACHE_TTL_SECONDS=120
#   2. **.env file** - key=value lines in the project root .env file
#
# Field ``upstream_timeout_seconds`` maps to env var
# ``UPSTREAM_TIMEOUT_SECONDS``.  Defaults apply when neither is set.
# ──────────────────────────────────────────────────────────────────────
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """saavn-artists application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream search provider ===
    upstream_base_url: str = "https://www.jiosaavn.com/api.php"
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)
    upstream_user_agent: str = "saavn-artists/0.1.0"
    page_size: int = Field(default=50, ge=1, le=100)

    # === Result cache ===
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    cache_max_entries: int = Field(default=1024, ge=1)
    # Timer-driven sweep; 0 disables the background loop.
    sweep_interval_seconds: float = Field(default=60.0, ge=0)
    # Per-miss sweep trigger probability; 0 disables it.
    sweep_probability: float = Field(default=0.1, ge=0, le=1)

    # === Query planning ===
    # "fanout" merges several curated queries per language; "single" sends
    # one language-biased query.
    language_strategy: Literal["fanout", "single"] = "fanout"
    # "lenient" treats an unknown language tag as no language; "strict"
    # rejects the request with 400.
    language_policy: Literal["lenient", "strict"] = "lenient"
    fanout_max_subqueries: int = Field(default=5, ge=1, le=10)
    fanout_max_page: int = Field(default=10, ge=1)
    fanout_concurrency: int = Field(default=5, ge=1)
    default_query: str = "artist"

    # === Prefetch ===
    prefetch_enabled: bool = True

    # === Response shaping ===
    language_filter_enabled: bool = False
    language_filter_max_drop_ratio: float = Field(default=0.5, ge=0, le=1)
    sort_by_popularity: bool = False

    # === App Config ===
    cors_allowed_origins: str = "*"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    # YAML file holding the language catalog overrides.
    config_path: str = "config/config.yaml"

    def get_cors_origins(self) -> list[str]:
        """Split the comma-separated ``cors_allowed_origins`` value."""
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        return origins or ["*"]
