"""
Pytest configuration and fixtures
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.storage.base import StorageBackend
from src.storage.identity import StaticIdentityProvider
from src.storage.memory import InMemoryDocumentStore


@pytest.fixture
def valid_input():
    """Raw input for a well-formed report."""
    return {
        "description": "Large pothole on Main St",
        "location": {"latitude": 19.43, "longitude": -99.13},
        "photo_local_ref": "file://abc.jpg",
    }


@pytest.fixture
def memory_store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def local_backend(memory_store):
    """Local-mode backend: no blob store, anonymous owner."""
    return StorageBackend(
        documents=memory_store,
        identity=StaticIdentityProvider(),
        mode="local",
    )


@pytest.fixture
def mock_blobs():
    """Blob store that always succeeds."""
    blobs = MagicMock()
    blobs.upload.return_value = "https://storage.example.com/reports/photo.jpg"
    return blobs


@pytest.fixture
def mock_photos():
    """Photo reader returning fake JPEG bytes."""
    photos = MagicMock()
    photos.read.return_value = b"\xff\xd8\xff\xe0fake-jpeg"
    return photos


@pytest.fixture
def mock_documents():
    """Document store that records inserts."""
    documents = MagicMock()
    documents.list_all.return_value = []
    return documents


@pytest.fixture
def remote_backend(mock_documents, mock_blobs, mock_photos):
    """Remote-mode backend built from mock collaborators."""
    return StorageBackend(
        documents=mock_documents,
        blobs=mock_blobs,
        photos=mock_photos,
        identity=StaticIdentityProvider("user-123"),
        mode="remote",
    )


@pytest.fixture
def seed_file(tmp_path):
    """JSON file with two earlier reports."""
    path = tmp_path / "reportes.json"
    path.write_text(
        """[
    {
        "description": "Bache profundo en la avenida principal",
        "location": {"latitude": 19.4326, "longitude": -99.1332},
        "photoUri": "file://seed-1.jpg",
        "userId": "seed_user"
    },
    {
        "description": "Hoyo frente a la escuela",
        "location": {"latitude": 19.44, "longitude": -99.14},
        "photoUri": "file://seed-2.jpg",
        "userId": "seed_user"
    }
]""",
        encoding="utf-8",
    )
    return path
