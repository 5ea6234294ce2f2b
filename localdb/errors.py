from __future__ import annotations


class LocalDatabaseError(Exception):
    """Base class for errors raised by the local file database."""


class LocalDatabaseConfigError(LocalDatabaseError):
    """The store cannot run in this environment or with this configuration."""


class DocumentLoadError(LocalDatabaseError):
    """The backing file exists but could not be read or parsed."""

    def __init__(self, path, cause: BaseException):
        super().__init__(f"failed to load {path}: {cause!r}")
        self.path = path
        self.cause = cause
