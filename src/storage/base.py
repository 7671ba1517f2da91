"""
Storage collaborator contracts
Interfaces the report creation service depends on
"""

from dataclasses import dataclass
from typing import Optional, List, Protocol

from src.reports.document import ReportDocument


class IdentityProvider(Protocol):
    """Yields the id of the submitting user."""

    def current_user_id(self) -> Optional[str]:
        ...


class BlobStore(Protocol):
    """Stores photo bytes and returns a durable URL."""

    def upload(self, data: bytes, key: str, content_type: str = "image/jpeg") -> str:
        ...


class DocumentStore(Protocol):
    """Ordered, append-only collections of report documents."""

    def insert(self, collection_path: str, document: ReportDocument) -> None:
        ...

    def list_all(self, collection_path: str) -> List[ReportDocument]:
        ...


class PhotoReader(Protocol):
    """Loads the bytes behind a captured photo reference."""

    def read(self, photo_ref: str) -> bytes:
        ...


@dataclass
class StorageBackend:
    """
    Connected storage handle.

    A backend without a blob store runs in local mode: photos are not
    uploaded and the local reference is stored as-is.
    """
    documents: DocumentStore
    blobs: Optional[BlobStore] = None
    photos: Optional[PhotoReader] = None
    identity: Optional[IdentityProvider] = None
    mode: str = "local"

    @property
    def uploads_photos(self) -> bool:
        return self.blobs is not None
