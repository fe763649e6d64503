# ABOUTME: Backend package defining collaborator contracts and local implementations.
# ABOUTME: Exports the DataStore/ObjectStorage protocols, their errors, and SQLite-backed stand-ins.

from oneword.backend.exceptions import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    DataStoreError,
    StorageError,
)
from oneword.backend.local import LocalDataStore
from oneword.backend.protocol import AuthProvider, DataStore, ObjectStorage
from oneword.backend.storage import LocalObjectStorage

__all__ = [
    "AuthProvider",
    "DataStore",
    "DataStoreError",
    "FOREIGN_KEY_VIOLATION",
    "LocalDataStore",
    "LocalObjectStorage",
    "ObjectStorage",
    "StorageError",
    "UNIQUE_VIOLATION",
]
