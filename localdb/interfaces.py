from __future__ import annotations

from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    Filesystem capability consumed by LocalFileDatabase: one JSON document
    persisted at a single location.
    """

    @property
    def location(self) -> str:
        """Human-readable location, used in logs."""
        ...

    def load(self) -> dict[str, Any] | None:
        """
        Return the stored document, or None when nothing has been stored yet.

        Raises DocumentLoadError when the stored document is unreadable.
        """
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Replace the stored document in full."""
        ...


class KeyValueNamespace(Protocol):
    """
    The flat key-value surface shared with the cloud-backed stores.

    Keys under the reserved settings / operation prefixes are routed to their
    own namespaces by implementations; everything else is a file key.
    """

    async def put(self, key: str, value: Any, *, metadata: dict[str, Any] | None = None) -> Any: ...

    async def get(self, key: str) -> Any | None: ...

    async def get_with_metadata(self, key: str) -> Any | None: ...

    async def delete(self, key: str) -> Any: ...

    async def list(
        self,
        *,
        prefix: str = "",
        limit: int | None = None,
        cursor: str | None = None,
        processed: bool | None = None,
    ) -> Any: ...
