from __future__ import annotations

from .database import LocalFileDatabase
from .disk_store import DiskJsonDocumentStore
from .errors import DocumentLoadError, LocalDatabaseConfigError, LocalDatabaseError
from .interfaces import KeyValueDocumentStore, KeyValueNamespace
from .keys import OPERATION_PREFIX, SETTINGS_PREFIX, KeyKind, classify_key
from .models import FileRecord, IndexOperation, LocalDocument

__all__ = [
    "LocalFileDatabase",
    "DiskJsonDocumentStore",
    "KeyValueDocumentStore",
    "KeyValueNamespace",
    "LocalDatabaseError",
    "LocalDatabaseConfigError",
    "DocumentLoadError",
    "SETTINGS_PREFIX",
    "OPERATION_PREFIX",
    "KeyKind",
    "classify_key",
    "FileRecord",
    "IndexOperation",
    "LocalDocument",
]
