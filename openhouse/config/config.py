"""
Configuration module for Open House Explorer.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of openhouse/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
# Default: "development" for safe local testing
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Open House API
# =============================================================================

# Base URL of the project showcase API (no trailing slash)
OPENHOUSE_API_URL: str = os.getenv(
    "OPENHOUSE_API_URL", "https://openhouse-dev.vnrzone.site/api"
).rstrip("/")

# HTTP request timeout in seconds
# Default: 30 seconds - generous timeout for uploads on slow links
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Local Storage
# =============================================================================

# JSON file backing the local key-value store (notes, liked projects, session cookie)
LOCAL_STORAGE_PATH: Path = Path(
    os.getenv("LOCAL_STORAGE_PATH", str(_project_root / ".openhouse_storage.json"))
)


# =============================================================================
# Gallery
# =============================================================================

def _optional_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    return int(raw)


# Fixed shuffle seed for the gallery; unset means a fresh seed per session
GALLERY_SHUFFLE_SEED: Optional[int] = _optional_int(os.getenv("GALLERY_SHUFFLE_SEED"))


# =============================================================================
# Web Server
# =============================================================================

WEB_HOST: str = os.getenv("WEB_HOST", "127.0.0.1")
WEB_PORT: int = int(os.getenv("WEB_PORT", "5000"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate configuration values.
    
    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []
    
    if not OPENHOUSE_API_URL.startswith(("http://", "https://")):
        errors.append("OPENHOUSE_API_URL must start with http:// or https://")
    
    if is_production() and not OPENHOUSE_API_URL.startswith("https://"):
        errors.append("OPENHOUSE_API_URL must use https in production")
    
    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")
    
    if not (0 < WEB_PORT < 65536):
        errors.append("WEB_PORT must be between 1 and 65535")
    
    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  OPENHOUSE_API_URL: {OPENHOUSE_API_URL}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  LOCAL_STORAGE_PATH: {LOCAL_STORAGE_PATH}")
    print(f"  GALLERY_SHUFFLE_SEED: {GALLERY_SHUFFLE_SEED if GALLERY_SHUFFLE_SEED is not None else '(per session)'}")
    print(f"  WEB: {WEB_HOST}:{WEB_PORT}")
