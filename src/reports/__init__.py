"""
Pothole Reporter - Reports Module
Report entity, validation, stored document and device capture flow.

The creation service lives in src.reports.service.
"""

from src.reports.report import (
    Report,
    Location,
    ReportStatus,
    ValidationError,
    ValidationResult,
    validate_report,
)
from src.reports.document import ReportDocument
from src.reports.capture import (
    DeviceCaptureProvider,
    PermissionStatus,
    capture_location,
    capture_photo,
    collect_report_input,
)

__all__ = [
    # Entity
    "Report",
    "Location",
    "ReportStatus",
    "ValidationError",
    "ValidationResult",
    "validate_report",
    # Document
    "ReportDocument",
    # Capture
    "DeviceCaptureProvider",
    "PermissionStatus",
    "capture_location",
    "capture_photo",
    "collect_report_input",
]
