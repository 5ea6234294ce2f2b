from __future__ import annotations

import copy
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Stored values are not validated: every field below accepts any JSON value and
# keeps it as written. Only the defaults for missing/null fields are applied.

OPERATION_FIELDS = ("type", "timestamp", "data", "processed")


class FileRecord(BaseModel):
    # Unknown fields found on disk are kept and written back.
    model_config = ConfigDict(extra="allow")

    value: Any = ""
    metadata: Any = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_default(cls, v: Any) -> Any:
        # Records written before metadata existed carry null or nothing.
        return {} if v is None else v


class IndexOperation(BaseModel):
    """A queued index work item. Every field is stored untouched."""

    model_config = ConfigDict(extra="allow")

    type: Any = None
    timestamp: Any = None
    data: Any = None
    processed: Any = False

    @field_validator("processed", mode="before")
    @classmethod
    def _processed_default(cls, v: Any) -> Any:
        return False if v is None else v

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "IndexOperation":
        """Build a record from the known fields only; anything else in `payload` is dropped."""
        return cls(**{name: payload.get(name) for name in OPERATION_FIELDS})

    def public_copy(self) -> "IndexOperation":
        return IndexOperation.from_payload(copy.deepcopy(self.model_dump()))

    def sort_key(self) -> int | float:
        ts = self.timestamp
        if isinstance(ts, (int, float)):
            return ts
        if isinstance(ts, str):
            # Numeric strings order by their value; anything else sorts with the missing ones.
            try:
                return float(ts)
            except ValueError:
                return 0
        return 0


class IndexOperationEntry(BaseModel):
    id: str
    type: Any = None
    timestamp: Any = None
    data: Any = None
    processed: Any = False


class LocalDocument(BaseModel):
    """
    Mirrors the on-disk local-db.json schema exactly:
      {
        "files": { "<file_id>": {"value": "...", "metadata": {...}} },
        "settings": { "<key>": <any JSON value> },
        "operations": { "<operation_id>": {"type": "...", "timestamp": 0, "data": ..., "processed": false} }
      }

    A namespace that is not an object fails validation. A record that is not
    an object is kept as the file value / operation data rather than dropped.
    """

    files: dict[str, FileRecord] = Field(default_factory=dict)
    settings: dict[str, Any] = Field(default_factory=dict)
    operations: dict[str, IndexOperation] = Field(default_factory=dict)

    @field_validator("files", "settings", "operations", mode="before")
    @classmethod
    def _namespace_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("files", mode="before")
    @classmethod
    def _wrap_bare_files(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        return {k: rec if isinstance(rec, Mapping) else {"value": rec} for k, rec in v.items()}

    @field_validator("operations", mode="before")
    @classmethod
    def _wrap_bare_operations(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        return {k: rec if isinstance(rec, Mapping) else {"data": rec} for k, rec in v.items()}

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "LocalDocument":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# ---------------------------------------------------------------------------
# Result shapes returned by LocalFileDatabase
# ---------------------------------------------------------------------------


class WriteResult(BaseModel):
    success: bool = True


class ValueWithMetadata(BaseModel):
    value: Any
    metadata: Any = Field(default_factory=dict)


class FileListKey(BaseModel):
    name: str
    metadata: Any = Field(default_factory=dict)


class FileListResult(BaseModel):
    keys: list[FileListKey] = Field(default_factory=list)
    cursor: str | None = None
    list_complete: bool = True


class SettingListKey(BaseModel):
    name: str
    value: Any = None


class SettingListResult(BaseModel):
    keys: list[SettingListKey] = Field(default_factory=list)


class OperationListKey(BaseModel):
    name: str


class OperationKeyListResult(BaseModel):
    keys: list[OperationListKey] = Field(default_factory=list)
