from __future__ import annotations

import asyncio
import contextlib
import copy
import json
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Mapping

from pydantic import ValidationError

from .disk_store import DiskJsonDocumentStore
from .errors import DocumentLoadError
from .interfaces import KeyValueDocumentStore, KeyValueNamespace
from .keys import KeyKind, classify_key, operation_key
from .models import (
    FileListKey,
    FileListResult,
    FileRecord,
    IndexOperation,
    IndexOperationEntry,
    LocalDocument,
    OperationKeyListResult,
    OperationListKey,
    SettingListKey,
    SettingListResult,
    ValueWithMetadata,
    WriteResult,
)
from .pagination import page_after, prefixed_sorted, resolve_limit
from .paths import normalize_db_path, require_filesystem

logger = logging.getLogger(__name__)


def _decode_operation(value: Any) -> IndexOperation:
    payload = json.loads(value) if isinstance(value, (str, bytes, bytearray)) else value
    if not isinstance(payload, Mapping):
        raise ValueError(f"operation payload must be a JSON object, got {type(payload).__name__}")
    return IndexOperation.from_payload(payload)


def _encode_operation(op: IndexOperation) -> str:
    return json.dumps(op.model_dump(mode="json"), separators=(",", ":"), ensure_ascii=False)


class LocalFileDatabase(KeyValueNamespace):
    """
    File-backed stand-in for the cloud KV / document stores, for container and
    self-hosted deployments.

    The whole database is one JSON document with three namespaces (files,
    settings, queued index operations). It is loaded lazily on first access
    and rewritten in full after every mutation.

    Loading and every mutate-then-persist cycle run under a per-instance
    asyncio.Lock; blocking I/O runs in worker threads. Nothing coordinates
    separate processes sharing the same file.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        store: KeyValueDocumentStore | None = None,
    ) -> None:
        if store is None:
            require_filesystem()
            store = DiskJsonDocumentStore(normalize_db_path(db_path))
        self._store = store
        self._doc = LocalDocument()
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def location(self) -> str:
        return self._store.location

    @property
    def loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._lock:
            await self._load_locked()

    async def persist(self) -> None:
        async with self._lock:
            await self._load_locked()
            await self._persist_locked()

    async def _load_locked(self) -> None:
        if self._loaded:
            return
        try:
            raw = await asyncio.to_thread(self._store.load)
            if raw is not None:
                self._doc = LocalDocument.from_disk_doc(raw)
        except (DocumentLoadError, ValidationError) as e:
            # Start empty rather than fail the caller. The next write replaces the bad file.
            logger.error("LOCAL DB LOAD: failed to read %s: %r", self.location, e)
        self._loaded = True
        logger.debug(
            "LOCAL DB LOAD: %s files=%d settings=%d operations=%d",
            self.location,
            len(self._doc.files),
            len(self._doc.settings),
            len(self._doc.operations),
        )

    async def _persist_locked(self) -> None:
        snapshot = self._doc.to_disk_doc()
        await asyncio.to_thread(self._store.save, snapshot)

    async def _document(self) -> LocalDocument:
        await self.ensure_loaded()
        return self._doc

    @contextlib.asynccontextmanager
    async def _mutating(self) -> AsyncIterator[LocalDocument]:
        async with self._lock:
            await self._load_locked()
            yield self._doc
            await self._persist_locked()

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    async def put_file(
        self,
        file_id: str,
        value: Any = "",
        *,
        metadata: Mapping[str, Any] | None = None,
    ) -> WriteResult:
        record = FileRecord(value=value, metadata=copy.deepcopy(dict(metadata or {})))
        async with self._mutating() as doc:
            doc.files[file_id] = record
        return WriteResult()

    async def get_file(self, file_id: str) -> FileRecord | None:
        doc = await self._document()
        record = doc.files.get(file_id)
        if record is None:
            return None
        return record.model_copy(deep=True)

    async def get_file_with_metadata(self, file_id: str) -> FileRecord | None:
        return await self.get_file(file_id)

    async def delete_file(self, file_id: str) -> WriteResult:
        async with self._mutating() as doc:
            doc.files.pop(file_id, None)
        return WriteResult()

    async def list_files(
        self,
        *,
        prefix: str = "",
        limit: int | None = None,
        cursor: str | None = None,
    ) -> FileListResult:
        """
        One page of file keys in lexicographic order.

        Follow `cursor` until `list_complete` is true. An unknown cursor
        restarts the listing from the first key rather than raising.
        """
        page_size = resolve_limit(limit)
        doc = await self._document()
        page = page_after(prefixed_sorted(doc.files, prefix or ""), limit=page_size, cursor=cursor)
        keys = [
            FileListKey(name=name, metadata=copy.deepcopy(doc.files[name].metadata))
            for name in page.names
        ]
        return FileListResult(keys=keys, cursor=page.cursor, list_complete=not page.has_more)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def put_setting(self, key: str, value: Any) -> WriteResult:
        value = copy.deepcopy(value)
        async with self._mutating() as doc:
            doc.settings[key] = value
        return WriteResult()

    async def get_setting(self, key: str) -> Any | None:
        doc = await self._document()
        return copy.deepcopy(doc.settings.get(key))

    async def delete_setting(self, key: str) -> WriteResult:
        async with self._mutating() as doc:
            doc.settings.pop(key, None)
        return WriteResult()

    async def list_settings(self, *, prefix: str = "", limit: int | None = None) -> SettingListResult:
        # Single page: settings namespaces are small, no cursor support.
        page_size = resolve_limit(limit)
        doc = await self._document()
        names = prefixed_sorted(doc.settings, prefix or "")[:page_size]
        return SettingListResult(
            keys=[SettingListKey(name=name, value=copy.deepcopy(doc.settings[name])) for name in names]
        )

    # ------------------------------------------------------------------
    # Index operations
    # ------------------------------------------------------------------

    async def put_index_operation(
        self,
        operation_id: str,
        operation: IndexOperation | Mapping[str, Any],
    ) -> WriteResult:
        if isinstance(operation, IndexOperation):
            record = operation.public_copy()
        else:
            record = IndexOperation.from_payload(copy.deepcopy(dict(operation)))
        async with self._mutating() as doc:
            doc.operations[operation_id] = record
        return WriteResult()

    async def get_index_operation(self, operation_id: str) -> IndexOperation | None:
        doc = await self._document()
        op = doc.operations.get(operation_id)
        if op is None:
            return None
        return op.public_copy()

    async def delete_index_operation(self, operation_id: str) -> WriteResult:
        async with self._mutating() as doc:
            doc.operations.pop(operation_id, None)
        return WriteResult()

    async def list_index_operations(
        self,
        *,
        limit: int | None = None,
        processed: bool | None = None,
    ) -> list[IndexOperationEntry]:
        """Queued operations, oldest first; `processed` filters when not None."""
        page_size = resolve_limit(limit)
        doc = await self._document()
        ordered = sorted(doc.operations.items(), key=lambda item: item[1].sort_key())
        if processed is not None:
            ordered = [(op_id, op) for op_id, op in ordered if op.processed is processed]
        return [
            IndexOperationEntry(id=op_id, **op.public_copy().model_dump())
            for op_id, op in ordered[:page_size]
        ]

    # ------------------------------------------------------------------
    # Generic key-value surface
    # ------------------------------------------------------------------

    async def put(self, key: str, value: Any, *, metadata: Mapping[str, Any] | None = None) -> WriteResult:
        target = classify_key(key)
        if target.kind is KeyKind.SETTING:
            return await self.put_setting(target.ident, value)
        if target.kind is KeyKind.OPERATION:
            return await self.put_index_operation(target.ident, _decode_operation(value))
        return await self.put_file(target.ident, value, metadata=metadata)

    async def get(self, key: str) -> Any | None:
        target = classify_key(key)
        if target.kind is KeyKind.SETTING:
            return await self.get_setting(target.ident)
        if target.kind is KeyKind.OPERATION:
            op = await self.get_index_operation(target.ident)
            return _encode_operation(op) if op is not None else None
        record = await self.get_file(target.ident)
        return record.value if record is not None else None

    async def get_with_metadata(self, key: str) -> ValueWithMetadata | None:
        target = classify_key(key)
        if target.kind is KeyKind.FILE:
            record = await self.get_file_with_metadata(target.ident)
            if record is None:
                return None
            return ValueWithMetadata(value=record.value, metadata=record.metadata)
        # Operation keys answer with the encoded record on purpose, not with a file-namespace lookup.
        value = await self.get(key)
        if value is None:
            return None
        return ValueWithMetadata(value=value)

    async def delete(self, key: str) -> WriteResult:
        target = classify_key(key)
        if target.kind is KeyKind.SETTING:
            return await self.delete_setting(target.ident)
        if target.kind is KeyKind.OPERATION:
            return await self.delete_index_operation(target.ident)
        return await self.delete_file(target.ident)

    async def list(
        self,
        *,
        prefix: str = "",
        limit: int | None = None,
        cursor: str | None = None,
        processed: bool | None = None,
    ) -> FileListResult | SettingListResult | OperationKeyListResult:
        target = classify_key(prefix or "")
        if target.kind is KeyKind.SETTING:
            return await self.list_settings(prefix=prefix, limit=limit)
        if target.kind is KeyKind.OPERATION:
            # The queue lists as a whole; anything after the reserved prefix is ignored.
            ops = await self.list_index_operations(limit=limit, processed=processed)
            return OperationKeyListResult(keys=[OperationListKey(name=operation_key(op.id)) for op in ops])
        return await self.list_files(prefix=prefix, limit=limit, cursor=cursor)
