"""
Tests for the pothole report entity and validation rules
"""
import dataclasses
from datetime import datetime

import pytest

import sys
sys.path.insert(0, '.')

from src.reports.report import (
    Report,
    Location,
    ReportStatus,
    ValidationError,
    validate_report,
)


class TestReportCreation:
    """Test building reports."""

    def test_create_sets_defaults(self):
        """New reports are pending and timestamped."""
        report = Report.create("Large pothole on Main St", {"latitude": 19.43, "longitude": -99.13}, "file://abc.jpg")

        assert report.status == ReportStatus.PENDING
        assert isinstance(report.created_at, datetime)
        assert report.created_at.tzinfo is not None
        assert report.owner_id is None
        assert report.location == Location(19.43, -99.13)

    def test_create_with_owner(self):
        report = Report.create("Large pothole on Main St", None, None, owner_id="anon_user")
        assert report.owner_id == "anon_user"

    def test_ids_are_unique_and_increasing(self):
        """Reports created back to back get distinct, growing ids."""
        ids = [Report.create("x", None, None).id for _ in range(200)]

        assert len(set(ids)) == len(ids)
        assert ids == sorted(ids)

    def test_report_is_immutable(self):
        report = Report.create("Large pothole on Main St", None, None)

        with pytest.raises(dataclasses.FrozenInstanceError):
            report.description = "changed"

    def test_location_from_mapping_without_longitude(self):
        location = Location.from_raw({"latitude": 10})
        assert location.latitude == 10.0
        assert location.longitude is None

    def test_location_passthrough(self):
        location = Location(1.0, 2.0)
        assert Location.from_raw(location) is location
        assert Location.from_raw(None) is None

    @pytest.mark.parametrize("raw", ["north", [19.43, -99.13], 19.43])
    def test_location_from_non_mapping(self, raw):
        assert Location.from_raw(raw) is None

    def test_location_with_unparseable_coordinates(self):
        location = Location.from_raw({"latitude": "abc", "longitude": {"deg": 99}})

        assert location == Location(None, None)

    def test_location_numeric_strings(self):
        location = Location.from_raw({"latitude": "19.43", "longitude": "-99.13"})
        assert location == Location(19.43, -99.13)


class TestReportValidation:
    """Test validation rule order and boundaries."""

    def setup_method(self):
        self.location = {"latitude": 19.43, "longitude": -99.13}
        self.photo = "file://abc.jpg"

    def test_valid_report(self):
        report = Report.create("Large pothole on Main St", self.location, self.photo)

        result = report.validate()

        assert result.ok
        assert result.error is None
        assert result.message is None

    @pytest.mark.parametrize("description", [None, "", "short", "123456789"])
    def test_short_description_wins_over_everything(self, description):
        """Description rule is reported even when every other field is missing."""
        report = Report.create(description, None, None)

        result = validate_report(report)

        assert not result.ok
        assert result.error == ValidationError.DESCRIPTION_TOO_SHORT
        assert "10 characters" in result.message

    def test_ten_characters_is_enough(self):
        report = Report.create("1234567890", self.location, self.photo)
        assert report.validate().ok

    @pytest.mark.parametrize("location", [None, {}, {"longitude": -99.13}, {"latitude": None}])
    def test_missing_latitude(self, location):
        report = Report.create("Large pothole on Main St", location, self.photo)

        result = report.validate()

        assert result.error == ValidationError.LOCATION_REQUIRED

    @pytest.mark.parametrize("location", ["north", ["19.43"], {"latitude": "abc"}, {"latitude": True}])
    def test_malformed_location(self, location):
        report = Report.create("Large pothole on Main St", location, self.photo)

        assert report.validate().error == ValidationError.LOCATION_REQUIRED

    @pytest.mark.parametrize("description", [12345678901, ["Large pothole on Main St"], b"Large pothole on Main St"])
    def test_non_text_description(self, description):
        report = Report.create(description, self.location, self.photo)

        assert report.validate().error == ValidationError.DESCRIPTION_TOO_SHORT
        assert "Desc: ..." in report.summarize()

    def test_non_text_photo_reference(self):
        report = Report.create("Large pothole on Main St", self.location, 42)
        assert report.validate().error == ValidationError.PHOTO_REQUIRED

    def test_location_checked_before_photo(self):
        report = Report.create("Large pothole on Main St", None, None)
        assert report.validate().error == ValidationError.LOCATION_REQUIRED

    def test_equator_latitude_is_valid(self):
        report = Report.create("Large pothole on Main St", {"latitude": 0.0, "longitude": 0.0}, self.photo)
        assert report.validate().ok

    @pytest.mark.parametrize("photo", [None, ""])
    def test_missing_photo(self, photo):
        report = Report.create("Large pothole on Main St", self.location, photo)

        result = report.validate()

        assert result.error == ValidationError.PHOTO_REQUIRED
        assert result.message == "A photo of the pothole is required."

    def test_validation_does_not_change_report(self):
        report = Report.create("short", None, None)
        before = dataclasses.asdict(report)

        report.validate()
        report.validate()

        assert dataclasses.asdict(report) == before


class TestReportSummary:
    """Test log summary format."""

    def test_summary_truncates_description(self):
        description = "A very deep pothole next to the bus stop on 5th Avenue"
        report = Report.create(description, None, None)

        summary = report.summarize()

        assert summary == f"Report {report.id}, Status: Pending, Desc: {description[:30]}..."

    def test_summary_without_description(self):
        report = Report.create(None, None, None)
        assert report.summarize().endswith("Desc: ...")
