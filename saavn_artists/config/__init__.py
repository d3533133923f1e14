"""Configuration module - exports Settings, load_config, and the language catalog."""

from saavn_artists.config.languages import (
    SUPPORTED_LANGUAGES,
    LanguageProfile,
    build_language_catalog,
)
from saavn_artists.config.loader import load_config
from saavn_artists.config.settings import Settings

__all__ = [
    "SUPPORTED_LANGUAGES",
    "LanguageProfile",
    "Settings",
    "build_language_catalog",
    "load_config",
]
