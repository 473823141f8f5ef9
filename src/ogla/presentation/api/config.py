"""API configuration adapter.

Bridges the centralized ogla_config settings with the API layer.
"""

from functools import lru_cache

from ogla_config.settings import Settings, get_settings


@lru_cache
def get_api_settings() -> Settings:
    """Get settings from centralized configuration."""
    return get_settings()
