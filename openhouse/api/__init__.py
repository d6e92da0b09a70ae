"""
Remote API module.

Client for the Open House project showcase API.
"""

from openhouse.api.client import (
    ApiError,
    OpenHouseClient,
    UploadResult,
    extract_error_message,
)

__all__ = [
    "ApiError",
    "OpenHouseClient",
    "UploadResult",
    "extract_error_message",
]
