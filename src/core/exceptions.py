"""
Pothole Reporter - Error Types

Pipeline errors (raised by the report creation service) derive from
ReportError. Device capture errors derive from CaptureError and are raised
before a report is ever submitted.
"""

from typing import Optional


class ReportError(Exception):
    """Base class for report creation failures."""

    kind = "report_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ReportValidationFailed(ReportError):
    """Report input is malformed; the message is meant for the user."""

    kind = "validation_failed"

    def __init__(self, message: str, error: Optional[object] = None):
        super().__init__(message)
        self.error = error


class NotConnected(ReportError):
    """Document store or identity is not available."""

    kind = "not_connected"

    def __init__(self, message: str = "The system is not connected to the database."):
        super().__init__(message)


class UploadFailed(ReportError):
    """The report photo could not be uploaded."""

    kind = "upload_failed"

    def __init__(self, message: str = "Could not upload the report photo. Please try again."):
        super().__init__(message)


class PersistFailed(ReportError):
    """The report document could not be written."""

    kind = "persist_failed"

    def __init__(self, message: str = "Could not save the report to the database."):
        super().__init__(message)


class CaptureError(Exception):
    """Base class for camera and GPS failures."""

    kind = "capture_error"


class PermissionDenied(CaptureError):
    """The user refused access to a device resource."""

    kind = "permission_denied"

    def __init__(self, resource: str):
        super().__init__(f"Permission to use the {resource} was denied.")
        self.resource = resource


class GpsUnavailable(CaptureError):
    """No GPS fix could be obtained."""

    kind = "gps_unavailable"

    def __init__(self, message: str = "Could not get the location. Make sure GPS is turned on."):
        super().__init__(message)


class CaptureCancelled(CaptureError):
    """The user closed the camera without taking a photo."""

    kind = "capture_cancelled"

    def __init__(self, message: str = "Photo capture was cancelled."):
        super().__init__(message)
