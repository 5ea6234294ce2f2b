from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_DB_PATH = "./data/local-db.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    # Store location: plain path or file:// URI
    db_path: str

    # Logging
    log_level: str
    debug_log_requests: bool

    # HTTP surface
    cors_allow_origins: tuple[str, ...]


def get_settings() -> Settings:
    # Empty string counts as unset so a blank line in local.env keeps the default.
    db_path = os.getenv("LOCAL_DB_PATH", "").strip() or DEFAULT_DB_PATH

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    cors_allow_origins = _env_list("CORS_ALLOW_ORIGINS", "*")

    return Settings(
        db_path=db_path,
        log_level=log_level,
        debug_log_requests=debug_log_requests,
        cors_allow_origins=cors_allow_origins,
    )
