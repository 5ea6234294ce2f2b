from __future__ import annotations

from settings import DEFAULT_DB_PATH, get_settings


def test_defaults(monkeypatch):
    for name in ("LOCAL_DB_PATH", "LOG_LEVEL", "DEBUG_LOG_REQUESTS", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    s = get_settings()
    assert s.db_path == DEFAULT_DB_PATH
    assert s.log_level == "INFO"
    assert s.debug_log_requests is False
    assert s.cors_allow_origins == ("*",)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LOCAL_DB_PATH", "file:///srv/kv/db.json")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG_LOG_REQUESTS", "yes")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example ,")

    s = get_settings()
    assert s.db_path == "file:///srv/kv/db.json"
    assert s.log_level == "DEBUG"
    assert s.debug_log_requests is True
    assert s.cors_allow_origins == ("https://a.example", "https://b.example")


def test_blank_path_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("LOCAL_DB_PATH", "   ")
    assert get_settings().db_path == DEFAULT_DB_PATH
