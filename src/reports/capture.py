"""
Device capture flow
Turns camera and GPS access into the raw input of a report submission
"""

import logging
from enum import Enum
from typing import Optional, Dict, Any, Protocol

from src.core.exceptions import PermissionDenied, CaptureCancelled
from src.reports.report import Location

logger = logging.getLogger(__name__)


class PermissionStatus(str, Enum):
    """Answer to a device permission prompt."""
    GRANTED = "granted"
    DENIED = "denied"


class DeviceCaptureProvider(Protocol):
    """Camera and GPS access on the reporting device."""

    def request_location_permission(self) -> PermissionStatus:
        ...

    def get_current_location(self) -> Location:
        """Raises GpsUnavailable when no fix can be obtained."""
        ...

    def request_camera_permission(self) -> PermissionStatus:
        ...

    def capture_photo(self) -> Optional[str]:
        """Local photo reference, or None when the user cancels."""
        ...


def capture_location(provider: DeviceCaptureProvider) -> Location:
    """
    Ask for location access and read the current GPS fix.

    Raises:
        PermissionDenied: If location access is refused
        GpsUnavailable: If the device cannot get a fix
    """
    if provider.request_location_permission() != PermissionStatus.GRANTED:
        raise PermissionDenied("location")

    location = provider.get_current_location()
    logger.debug(f"GPS fix: ({location.latitude}, {location.longitude})")
    return location


def capture_photo(provider: DeviceCaptureProvider) -> str:
    """
    Ask for camera access and take a photo.

    Raises:
        PermissionDenied: If camera access is refused
        CaptureCancelled: If no photo was taken
    """
    if provider.request_camera_permission() != PermissionStatus.GRANTED:
        raise PermissionDenied("camera")

    photo_ref = provider.capture_photo()
    if not photo_ref:
        raise CaptureCancelled()

    return photo_ref


def collect_report_input(provider: DeviceCaptureProvider, description: str) -> Dict[str, Any]:
    """
    Gather everything a report submission needs from the device.

    Args:
        provider: Device camera and GPS access
        description: Text typed by the user

    Returns:
        Raw input for ReportCreationService.create_report
    """
    location = capture_location(provider)
    photo_ref = capture_photo(provider)

    return {
        "description": description,
        "location": location.to_dict(),
        "photo_local_ref": photo_ref,
    }
