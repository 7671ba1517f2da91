"""
Stored projection of a pothole report
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from src.reports.report import Report


@dataclass(frozen=True)
class ReportDocument:
    """
    Document written to the document store for one submitted report.

    photo_ref holds the remote URL when the photo was uploaded, otherwise
    the local reference captured on the device.
    """
    report_id: int
    description: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    photo_ref: Optional[str]
    status: str
    timestamp: datetime
    user_id: str
    app_id: str
    photo_is_remote: bool = True

    @classmethod
    def from_report(
        cls,
        report: Report,
        photo_ref: Optional[str],
        timestamp: datetime,
        user_id: str,
        app_id: str,
        photo_is_remote: bool = True,
    ) -> "ReportDocument":
        """Build the document for a validated report."""
        location = report.location
        return cls(
            report_id=report.id,
            description=report.description,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
            photo_ref=photo_ref,
            status=report.status.value,
            timestamp=timestamp,
            user_id=user_id,
            app_id=app_id,
            photo_is_remote=photo_is_remote,
        )

    @property
    def photo_field(self) -> str:
        return "photoUrl" if self.photo_is_remote else "photoLocalRef"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored document shape."""
        return {
            "reportId": self.report_id,
            "description": self.description,
            "location": {
                "latitude": self.latitude,
                "longitude": self.longitude,
            },
            self.photo_field: self.photo_ref,
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
            "userId": self.user_id,
            "appId": self.app_id,
        }

