from __future__ import annotations

from pathlib import Path
from typing import Any

from json_store import atomic_write_json, read_json

from .errors import DocumentLoadError
from .interfaces import KeyValueDocumentStore
from .locks import GLOBAL_PATH_LOCKS
from .paths import ensure_dir


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Returns None when the file is missing.
    - Raises DocumentLoadError for unreadable files, invalid JSON, or a
      top-level value that is not an object.
    - Writes atomically, creating the parent directory as needed.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> dict[str, Any] | None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            ensure_dir(self._path.parent)
            try:
                raw = read_json(self._path)
            except (OSError, ValueError) as e:
                raise DocumentLoadError(self._path, e) from e
        if raw is None and not self._path.exists():
            return None
        if not isinstance(raw, dict):
            raise DocumentLoadError(self._path, TypeError(f"expected a JSON object, got {type(raw).__name__}"))
        return raw

    def save(self, doc: dict[str, Any]) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            atomic_write_json(self._path, doc)
