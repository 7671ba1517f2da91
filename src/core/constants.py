"""
Pothole Reporter - Constants and Reference Data
Static values used throughout the application.
"""

from typing import Tuple

# =============================================================================
# REPORT RULES
# =============================================================================

# Minimum number of characters for a report description
MIN_DESCRIPTION_LENGTH: int = 10

# Number of description characters shown in a report summary
SUMMARY_DESCRIPTION_CHARS: int = 30

# =============================================================================
# STORAGE LAYOUT
# =============================================================================

DEFAULT_APP_ID: str = "MandaTuHoyoApp-Dev"
DEFAULT_COLLECTION: str = "reportes"

# Documents live under artifacts/<app_id>/public/data/<collection>
COLLECTION_PATH_TEMPLATE: str = "artifacts/{app_id}/public/data/{collection}"

# Owner id used when no identity provider is configured
ANONYMOUS_USER_ID: str = "anon_user"

# Photo uploads
PHOTO_KEY_PREFIX: str = "reportes_hoyos"
PHOTO_CONTENT_TYPE: str = "image/jpeg"
PHOTO_EXTENSION: str = ".jpg"
PHOTO_TOKEN_LENGTH: int = 7

# Local references accepted by the photo reader
LOCAL_PHOTO_SCHEMES: Tuple[str, ...] = ("file",)
