"""
Pothole Reporter - Core Utilities
Central configuration, logging, constants and error types.
"""

from src.core.config import settings, get_settings, Settings
from src.core.constants import (
    MIN_DESCRIPTION_LENGTH,
    ANONYMOUS_USER_ID,
    COLLECTION_PATH_TEMPLATE,
)
from src.core.exceptions import (
    ReportError,
    ReportValidationFailed,
    NotConnected,
    UploadFailed,
    PersistFailed,
    CaptureError,
    PermissionDenied,
    GpsUnavailable,
    CaptureCancelled,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "MIN_DESCRIPTION_LENGTH",
    "ANONYMOUS_USER_ID",
    "COLLECTION_PATH_TEMPLATE",
    "ReportError",
    "ReportValidationFailed",
    "NotConnected",
    "UploadFailed",
    "PersistFailed",
    "CaptureError",
    "PermissionDenied",
    "GpsUnavailable",
    "CaptureCancelled",
]
