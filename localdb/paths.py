from __future__ import annotations

import sys
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from .errors import LocalDatabaseConfigError

DEFAULT_DB_PATH = Path("data") / "local-db.json"

# Interpreters whose "filesystem" is a sandbox that does not outlive the page/process.
_NO_FILESYSTEM_PLATFORMS = ("emscripten", "wasi")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def normalize_db_path(value: str | Path | None) -> Path:
    """
    Resolve the configured store location to a filesystem path.

    Accepts a plain path, a Path, or a file: URI (file:///srv/db.json,
    file:relative/db.json). None or "" selects DEFAULT_DB_PATH.
    """
    if value is None or value == "":
        return DEFAULT_DB_PATH
    if isinstance(value, Path):
        return value
    if value.startswith("file:"):
        parsed = urlparse(value)
        if parsed.netloc and parsed.netloc != "localhost":
            raise LocalDatabaseConfigError(f"file URI must not name a remote host: {value!r}")
        if not parsed.path:
            raise LocalDatabaseConfigError(f"file URI has no path: {value!r}")
        if parsed.path.startswith("/"):
            return Path(url2pathname(parsed.path))
        return Path(unquote(parsed.path))
    return Path(value)


def require_filesystem() -> None:
    if sys.platform in _NO_FILESYSTEM_PLATFORMS:
        raise LocalDatabaseConfigError(
            f"LocalFileDatabase requires a real filesystem; unavailable on platform {sys.platform!r}."
        )
