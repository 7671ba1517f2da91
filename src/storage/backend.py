"""
Storage backend initialization

connect() turns settings into a connected StorageBackend, or raises
NotConnected. The report creation service requires the returned handle.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.core.config import Settings, get_settings
from src.core.constants import COLLECTION_PATH_TEMPLATE
from src.core.exceptions import NotConnected
from src.database.connection import DatabaseConnection
from src.storage.base import StorageBackend
from src.storage.blob import HttpBlobStore, LocalPhotoReader
from src.storage.identity import AnonymousIdentityProvider, StaticIdentityProvider
from src.storage.memory import InMemoryDocumentStore, load_seed_documents
from src.storage.sql import SqlDocumentStore

logger = logging.getLogger(__name__)


def collection_path(app_id: str, collection: str) -> str:
    """Path of a report collection inside an app namespace."""
    return COLLECTION_PATH_TEMPLATE.format(app_id=app_id, collection=collection)


def connect_local(settings: Settings) -> StorageBackend:
    """In-process store with the anonymous marker identity."""
    store = InMemoryDocumentStore()

    if settings.seed_file:
        loaded = load_seed_documents(
            store,
            settings.seed_file,
            collection_path(settings.app_id, settings.collection_name),
            settings.app_id,
        )
        logger.info(f"Loaded {loaded} seed reports from {settings.seed_file}")

    return StorageBackend(
        documents=store,
        identity=StaticIdentityProvider(settings.anonymous_user_id),
        mode="local",
    )


def connect_remote(settings: Settings) -> StorageBackend:
    """Database-backed document store plus HTTP blob uploads."""
    if not settings.database_url:
        raise NotConnected("Remote storage is not configured: DATABASE_URL is missing.")
    if not settings.blob_base_url:
        raise NotConnected("Remote storage is not configured: BLOB_BASE_URL is missing.")

    try:
        db = DatabaseConnection(settings.database_url)
    except SQLAlchemyError as e:
        raise NotConnected("Could not connect to the report database.") from e

    if not db.check_connection():
        db.close()
        raise NotConnected("Could not connect to the report database.")

    identity = AnonymousIdentityProvider()
    identity.sign_in()

    return StorageBackend(
        documents=SqlDocumentStore(db),
        blobs=HttpBlobStore(
            settings.blob_base_url,
            settings.blob_bucket,
            public_url=settings.blob_public_url,
            api_token=settings.blob_api_token,
            timeout=settings.upload_timeout_seconds,
        ),
        photos=LocalPhotoReader(settings.capture_dir),
        identity=identity,
        mode="remote",
    )


def connect(settings: Optional[Settings] = None) -> StorageBackend:
    """
    Initialize storage for the configured mode.

    Args:
        settings: Settings to use (defaults to the cached settings)

    Returns:
        Connected StorageBackend

    Raises:
        NotConnected: If the remote backend is misconfigured or unreachable
    """
    settings = settings or get_settings()

    if settings.is_remote:
        backend = connect_remote(settings)
    else:
        backend = connect_local(settings)

    logger.info(f"Storage connected in {backend.mode} mode (app_id={settings.app_id})")
    return backend
