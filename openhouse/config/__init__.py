"""
Configuration module.

Handles environment variables, API location, and local storage settings.
"""

from openhouse.config.config import (
    APP_ENV,
    DEBUG,
    OPENHOUSE_API_URL,
    REQUEST_TIMEOUT,
    LOCAL_STORAGE_PATH,
    GALLERY_SHUFFLE_SEED,
    WEB_HOST,
    WEB_PORT,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "OPENHOUSE_API_URL",
    "REQUEST_TIMEOUT",
    "LOCAL_STORAGE_PATH",
    "GALLERY_SHUFFLE_SEED",
    "WEB_HOST",
    "WEB_PORT",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
