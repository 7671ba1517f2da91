"""
Pothole report entity
Captured fields of a citizen report and the rules that make it well-formed
"""

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Any, Mapping, Union

from src.core.constants import MIN_DESCRIPTION_LENGTH, SUMMARY_DESCRIPTION_CHARS


class ReportStatus(str, Enum):
    """Status of a pothole report."""
    PENDING = "Pending"


class ValidationError(Enum):
    """Reasons a report is rejected, in the order they are checked."""
    DESCRIPTION_TOO_SHORT = "description_too_short"
    LOCATION_REQUIRED = "location_required"
    PHOTO_REQUIRED = "photo_required"

    @property
    def message(self) -> str:
        return _VALIDATION_MESSAGES[self]


_VALIDATION_MESSAGES = {
    ValidationError.DESCRIPTION_TOO_SHORT: (
        f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long."
    ),
    ValidationError.LOCATION_REQUIRED: "GPS location is required.",
    ValidationError.PHOTO_REQUIRED: "A photo of the pothole is required.",
}


def _coordinate(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Location:
    """GPS coordinates. Either field may be missing on raw input."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_raw(cls, raw: Union["Location", Mapping[str, Any], None]) -> Optional["Location"]:
        """
        Normalize raw input into a Location.

        Anything that is not a Location or a mapping becomes None, and a
        coordinate that is not a number becomes None, so bad input is left
        for validation to report.
        """
        if raw is None or isinstance(raw, Location):
            return raw
        if not isinstance(raw, Mapping):
            return None
        return cls(
            latitude=_coordinate(raw.get("latitude")),
            longitude=_coordinate(raw.get("longitude")),
        )

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a report: ok, or exactly one error."""
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


_id_lock = threading.Lock()
_last_id = 0


def _next_report_id() -> int:
    """Milliseconds since epoch, bumped so ids never repeat within a process."""
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000_000
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return candidate


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Report:
    """
    Pothole report submitted by a citizen.

    Built with Report.create(); construction never fails, validity is
    checked separately with validate().
    """
    id: int
    description: Optional[str]
    location: Optional[Location]
    photo_local_ref: Optional[str]
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    owner_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        description: Optional[str],
        location: Union[Location, Mapping[str, Any], None],
        photo_local_ref: Optional[str],
        owner_id: Optional[str] = None,
    ) -> "Report":
        """
        Create a new pending report.

        Args:
            description: Free text description
            location: Location or {"latitude": .., "longitude": ..} mapping
            photo_local_ref: Local reference to the captured photo
            owner_id: Submitting identity, if already known

        Returns:
            New Report with a fresh id and creation time
        """
        return cls(
            id=_next_report_id(),
            description=description,
            location=Location.from_raw(location),
            photo_local_ref=photo_local_ref,
            status=ReportStatus.PENDING,
            created_at=_utcnow(),
            owner_id=owner_id,
        )

    def validate(self) -> ValidationResult:
        """Validate this report. See validate_report."""
        return validate_report(self)

    def summarize(self) -> str:
        """One-line summary for logs."""
        desc = self.description if isinstance(self.description, str) else ""
        desc = desc[:SUMMARY_DESCRIPTION_CHARS]
        return f"Report {self.id}, Status: {self.status.value}, Desc: {desc}..."


def validate_report(report: Report) -> ValidationResult:
    """
    Check a report against the submission rules.

    Rules are checked in order and the first failure is returned:
    description length, then latitude, then photo reference.

    Args:
        report: Report to check

    Returns:
        ValidationResult with no error when the report is well-formed
    """
    description = report.description
    if not isinstance(description, str) or len(description) < MIN_DESCRIPTION_LENGTH:
        return ValidationResult(ValidationError.DESCRIPTION_TOO_SHORT)

    if report.location is None or report.location.latitude is None:
        return ValidationResult(ValidationError.LOCATION_REQUIRED)

    if not isinstance(report.photo_local_ref, str) or not report.photo_local_ref:
        return ValidationResult(ValidationError.PHOTO_REQUIRED)

    return ValidationResult()
