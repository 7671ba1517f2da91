"""
Pothole Reporter - Storage Module
Document stores, blob uploads, identity and backend initialization.
"""

from src.storage.base import (
    StorageBackend,
    DocumentStore,
    BlobStore,
    IdentityProvider,
    PhotoReader,
)
from src.storage.memory import InMemoryDocumentStore, load_seed_documents
from src.storage.sql import SqlDocumentStore
from src.storage.blob import HttpBlobStore, LocalPhotoReader
from src.storage.identity import StaticIdentityProvider, AnonymousIdentityProvider
from src.storage.backend import connect, collection_path

__all__ = [
    "StorageBackend",
    "DocumentStore",
    "BlobStore",
    "IdentityProvider",
    "PhotoReader",
    "InMemoryDocumentStore",
    "load_seed_documents",
    "SqlDocumentStore",
    "HttpBlobStore",
    "LocalPhotoReader",
    "StaticIdentityProvider",
    "AnonymousIdentityProvider",
    "connect",
    "collection_path",
]
