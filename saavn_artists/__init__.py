"""saavn-artists: language-bucketed JioSaavn artist search with a result cache."""

__version__ = "0.1.0"
