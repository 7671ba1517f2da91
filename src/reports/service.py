"""
Report creation service
Validates citizen pothole reports, uploads their photo and stores them
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from src.core.config import Settings
from src.core.constants import (
    DEFAULT_APP_ID,
    DEFAULT_COLLECTION,
    PHOTO_KEY_PREFIX,
    PHOTO_CONTENT_TYPE,
    PHOTO_EXTENSION,
    PHOTO_TOKEN_LENGTH,
)
from src.core.exceptions import (
    NotConnected,
    PersistFailed,
    ReportValidationFailed,
    UploadFailed,
)
from src.reports.document import ReportDocument
from src.reports.report import Report
from src.storage.backend import collection_path
from src.storage.base import StorageBackend, IdentityProvider
from src.storage.blob import LocalPhotoReader

logger = logging.getLogger(__name__)


class ReportCreationService:
    """
    Creates pothole reports.

    One instance is built at startup from a connected StorageBackend and
    shared by every caller. With a blob store the photo is uploaded and its
    URL stored; without one (local mode) the local reference is stored.
    """

    def __init__(
        self,
        backend: StorageBackend,
        identity: Optional[IdentityProvider] = None,
        app_id: str = DEFAULT_APP_ID,
        collection_name: str = DEFAULT_COLLECTION,
        photo_key_prefix: str = PHOTO_KEY_PREFIX,
    ):
        """
        Initialize report creation service.

        Args:
            backend: Connected storage (see src.storage.connect)
            identity: Identity provider, defaults to the backend's
            app_id: Namespace tag written on every document
            collection_name: Report collection inside the namespace
            photo_key_prefix: Prefix of uploaded photo keys
        """
        self.backend = backend
        self.identity = identity or backend.identity
        self.app_id = app_id
        self.collection_name = collection_name
        self.photo_key_prefix = photo_key_prefix
        self.photos = backend.photos or LocalPhotoReader()

        logger.info(f"ReportCreationService initialized ({backend.mode} mode)")

    @classmethod
    def from_settings(cls, backend: StorageBackend, settings: Settings) -> "ReportCreationService":
        return cls(
            backend,
            app_id=settings.app_id,
            collection_name=settings.collection_name,
            photo_key_prefix=settings.photo_key_prefix,
        )

    @property
    def collection_path(self) -> str:
        return collection_path(self.app_id, self.collection_name)

    def create_report(
        self,
        raw_input: Dict[str, Any],
        photo_bytes: Optional[bytes] = None,
    ) -> ReportDocument:
        """
        Validate, upload and store a new report.

        Args:
            raw_input: Mapping with description, location and
                photo_local_ref (photoUri is accepted as an alias)
            photo_bytes: Photo contents already in hand (an HTTP upload).
                When given, they are uploaded and photo_local_ref is
                never read.

        Returns:
            The stored ReportDocument

        Raises:
            NotConnected: No identity is available
            ReportValidationFailed: Input breaks a report rule
            UploadFailed: The photo could not be read or uploaded
            PersistFailed: The document could not be written
        """
        owner_id = self._resolve_owner()

        report = Report.create(
            raw_input.get("description"),
            raw_input.get("location"),
            raw_input.get("photo_local_ref", raw_input.get("photoUri")),
            owner_id,
        )

        result = report.validate()
        if not result.ok:
            logger.info(f"Report rejected: {result.message}")
            raise ReportValidationFailed(result.message, result.error)

        if self.backend.uploads_photos and report.photo_local_ref:
            photo_ref = self._upload_photo(report.photo_local_ref, owner_id, photo_bytes)
        else:
            photo_ref = report.photo_local_ref

        document = ReportDocument.from_report(
            report,
            photo_ref=photo_ref,
            timestamp=datetime.now(timezone.utc),
            user_id=owner_id,
            app_id=self.app_id,
            photo_is_remote=self.backend.uploads_photos,
        )

        try:
            self.backend.documents.insert(self.collection_path, document)
        except Exception as e:
            logger.error(f"Failed to store report {report.id}: {e}")
            raise PersistFailed() from e

        logger.info(f"Report created: {report.summarize()}")
        return document

    def list_all(self) -> List[ReportDocument]:
        """All stored reports, oldest first."""
        return self.backend.documents.list_all(self.collection_path)

    def photo_key(self, owner_id: str) -> str:
        """Unique object key for a new photo of this owner."""
        token = uuid.uuid4().hex[:PHOTO_TOKEN_LENGTH]
        return f"{self.photo_key_prefix}/{owner_id}/{time.time_ns() // 1_000_000}_{token}{PHOTO_EXTENSION}"

    def _resolve_owner(self) -> str:
        if self.identity is None:
            raise NotConnected()

        owner_id = self.identity.current_user_id()
        if not owner_id:
            raise NotConnected()

        return owner_id

    def _upload_photo(self, photo_ref: str, owner_id: str, data: Optional[bytes] = None) -> str:
        key = self.photo_key(owner_id)
        try:
            if data is None:
                data = self.photos.read(photo_ref)
            url = self.backend.blobs.upload(data, key, PHOTO_CONTENT_TYPE)
        except Exception as e:
            logger.error(f"Failed to upload photo {photo_ref}: {e}")
            raise UploadFailed() from e

        logger.info(f"Photo uploaded: {url}")
        return url
