"""Active settings for the lazyviews package."""

import logging

from lazyviews.models import ViewSettings

logger = logging.getLogger("lazyviews")

_settings = ViewSettings()


def get_settings() -> ViewSettings:
    """Return the settings currently in effect"""
    return _settings


def configure(**overrides) -> ViewSettings:
    """Validate and install new settings on top of the current ones"""
    global _settings
    merged = {**_settings.model_dump(), **overrides}
    _settings = ViewSettings(**merged)
    logger.setLevel(_settings.numeric_log_level())
    logger.debug(f"Settings updated: {_settings.model_dump()}")
    return _settings


def reset_settings() -> ViewSettings:
    """Restore default settings"""
    global _settings
    _settings = ViewSettings()
    logger.setLevel(logging.NOTSET)
    return _settings
