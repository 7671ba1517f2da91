"""
Tests for API endpoints
"""
import pytest
from fastapi.testclient import TestClient

import sys
sys.path.insert(0, '.')

from src.core.config import Settings
from src.api.main import create_app

FORM = {"description": "Large pothole on Main St", "latitude": "19.43", "longitude": "-99.13"}
PHOTO = {"photo": ("pothole.jpg", b"\xff\xd8\xff\xe0uploaded", "image/jpeg")}


@pytest.fixture
def settings():
    return Settings(storage_mode="local", app_id="TestApp", seed_file=None)


@pytest.fixture
def client(settings, local_backend):
    app = create_app(settings=settings, backend=local_backend)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def remote_client(settings, remote_backend):
    app = create_app(settings=settings, backend=remote_backend)
    with TestClient(app) as test_client:
        yield test_client


class TestAPIEndpoints:
    """Test suite for API endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage_mode"] == "local"
        assert data["app_id"] == "TestApp"

    def test_create_report(self, client, valid_input):
        response = client.post("/api/v1/reports", json=valid_input)

        assert response.status_code == 201
        data = response.json()
        assert data["description"] == "Large pothole on Main St"
        assert data["latitude"] == 19.43
        assert data["photo_local_ref"] == "file://abc.jpg"
        assert data["photo_url"] is None
        assert data["status"] == "Pending"
        assert data["user_id"] == "anon_user"
        assert data["app_id"] == "TestApp"

    def test_create_report_with_photo_uri_alias(self, client):
        response = client.post("/api/v1/reports", json={
            "description": "Large pothole on Main St",
            "location": {"latitude": 19.43, "longitude": -99.13},
            "photoUri": "file://abc.jpg",
        })

        assert response.status_code == 201
        assert response.json()["photo_local_ref"] == "file://abc.jpg"

    def test_list_reports_in_order(self, client, valid_input):
        first = client.post("/api/v1/reports", json=valid_input).json()
        second = client.post("/api/v1/reports", json=valid_input).json()

        response = client.get("/api/v1/reports")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [r["report_id"] for r in data["reports"]] == [first["report_id"], second["report_id"]]

    def test_validation_error(self, client):
        response = client.post("/api/v1/reports", json={
            "description": "Large pothole on Main St",
            "location": {"longitude": -99.13},
            "photo_local_ref": "file://abc.jpg",
        })

        assert response.status_code == 422
        assert response.json() == {"detail": "GPS location is required.", "error": "validation_failed"}
        assert client.get("/api/v1/reports").json()["count"] == 0

    def test_remote_report_has_photo_url(self, remote_client, mock_blobs, mock_photos):
        response = remote_client.post("/api/v1/reports/with-photo", data=FORM, files=PHOTO)

        assert response.status_code == 201
        data = response.json()
        assert data["photo_url"] == "https://storage.example.com/reports/photo.jpg"
        assert data["photo_local_ref"] is None
        assert data["user_id"] == "user-123"
        assert mock_blobs.upload.call_args.args[0] == b"\xff\xd8\xff\xe0uploaded"
        assert mock_photos.read.call_count == 0

    def test_remote_json_route_does_not_read_server_files(self, remote_client, mock_blobs, mock_photos, mock_documents, tmp_path):
        secret = tmp_path / "server.env"
        secret.write_text("BLOB_API_TOKEN=token-abc")

        for ref in (str(secret), secret.as_uri(), "http://169.254.169.254/latest/meta-data/"):
            response = remote_client.post("/api/v1/reports", json={
                "description": "Large pothole on Main St",
                "location": {"latitude": 19.43, "longitude": -99.13},
                "photo_local_ref": ref,
            })

            assert response.status_code == 422
            assert response.json()["error"] == "validation_failed"

        assert mock_photos.read.call_count == 0
        assert mock_blobs.upload.call_count == 0
        assert mock_documents.insert.call_count == 0

    def test_with_photo_missing_photo(self, remote_client, mock_blobs):
        response = remote_client.post("/api/v1/reports/with-photo", data=FORM)

        assert response.status_code == 422
        assert response.json() == {"detail": "A photo of the pothole is required.", "error": "validation_failed"}
        assert mock_blobs.upload.call_count == 0

    def test_with_photo_rule_order(self, remote_client):
        response = remote_client.post("/api/v1/reports/with-photo", data={"description": "short"})

        assert response.status_code == 422
        assert response.json()["detail"] == "Description must be at least 10 characters long."

    def test_with_photo_in_local_mode(self, client):
        response = client.post("/api/v1/reports/with-photo", data=FORM, files=PHOTO)

        assert response.status_code == 201
        assert response.json()["photo_local_ref"] == "pothole.jpg"

    def test_upload_failure(self, remote_client, mock_blobs, mock_documents):
        mock_blobs.upload.side_effect = ConnectionError("bucket unreachable")

        response = remote_client.post("/api/v1/reports/with-photo", data=FORM, files=PHOTO)

        assert response.status_code == 502
        assert response.json()["error"] == "upload_failed"
        assert mock_documents.insert.call_count == 0

    def test_persist_failure(self, remote_client, mock_documents):
        mock_documents.insert.side_effect = RuntimeError("write rejected")

        response = remote_client.post("/api/v1/reports/with-photo", data=FORM, files=PHOTO)

        assert response.status_code == 502
        assert response.json()["error"] == "persist_failed"

    def test_not_connected(self, settings, mock_documents, valid_input):
        from src.storage.base import StorageBackend

        app = create_app(settings=settings, backend=StorageBackend(documents=mock_documents))
        with TestClient(app) as client:
            response = client.post("/api/v1/reports", json=valid_input)

        assert response.status_code == 503
        assert response.json()["error"] == "not_connected"

    def test_out_of_range_latitude(self, client):
        response = client.post("/api/v1/reports", json={
            "description": "Large pothole on Main St",
            "location": {"latitude": 200, "longitude": -99.13},
            "photo_local_ref": "file://abc.jpg",
        })

        assert response.status_code == 422
        data = response.json()
        assert set(data) == {"detail", "error"}
        assert data["error"] == "validation_failed"
        assert data["detail"].startswith("location.latitude:")

    def test_non_numeric_latitude(self, client):
        response = client.post("/api/v1/reports", json={
            "description": "Large pothole on Main St",
            "location": {"latitude": "north"},
            "photo_local_ref": "file://abc.jpg",
        })

        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"

    def test_non_numeric_form_latitude(self, client):
        response = client.post(
            "/api/v1/reports/with-photo",
            data={**FORM, "latitude": "north"},
            files=PHOTO,
        )

        assert response.status_code == 422
        assert response.json()["detail"].startswith("latitude:")
        assert client.get("/api/v1/reports").json()["count"] == 0
