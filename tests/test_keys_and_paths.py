from __future__ import annotations

from pathlib import Path

import pytest

from localdb.errors import DocumentLoadError, LocalDatabaseConfigError
from localdb.disk_store import DiskJsonDocumentStore
from localdb.keys import OPERATION_PREFIX, SETTINGS_PREFIX, KeyKind, classify_key, operation_key
from localdb.pagination import DEFAULT_LIST_LIMIT, page_after, prefixed_sorted, resolve_limit
from localdb.paths import DEFAULT_DB_PATH, normalize_db_path


def test_reserved_prefixes_are_stable():
    assert SETTINGS_PREFIX == "manage@sysConfig@"
    assert OPERATION_PREFIX == "manage@index@operation_"


@pytest.mark.parametrize(
    "key, kind, ident",
    [
        ("manage@sysConfig@theme", KeyKind.SETTING, "manage@sysConfig@theme"),
        ("manage@index@operation_abc", KeyKind.OPERATION, "abc"),
        ("manage@index@operation_", KeyKind.OPERATION, ""),
        ("manage@index@operation_x_manage@index@operation_", KeyKind.OPERATION, "x_manage@index@operation_"),
        ("manage@sysConfig", KeyKind.FILE, "manage@sysConfig"),
        ("photos/cat.jpg", KeyKind.FILE, "photos/cat.jpg"),
        ("", KeyKind.FILE, ""),
    ],
)
def test_classify_key(key, kind, ident):
    target = classify_key(key)
    assert target.kind is kind
    assert target.key == key
    assert target.ident == ident


def test_operation_key_roundtrip():
    assert classify_key(operation_key("17")).ident == "17"


def test_resolve_limit():
    assert resolve_limit(None) == DEFAULT_LIST_LIMIT
    assert resolve_limit(0) == DEFAULT_LIST_LIMIT
    assert resolve_limit(5) == 5
    with pytest.raises(ValueError):
        resolve_limit(-3)


def test_page_after():
    names = prefixed_sorted(["c", "a", "b", "zz"], "")
    assert names == ["a", "b", "c", "zz"]

    page = page_after(names, limit=2)
    assert page.names == ["a", "b"]
    assert page.cursor == "b"
    assert page.has_more is True

    page = page_after(names, limit=2, cursor="b")
    assert page.names == ["c", "zz"]
    assert page.cursor is None
    assert page.has_more is False

    assert page_after(names, limit=2, cursor="zz").names == []
    assert page_after(names, limit=10, cursor="missing").names == names


def test_normalize_db_path(tmp_path):
    assert normalize_db_path(None) == DEFAULT_DB_PATH
    assert normalize_db_path("") == DEFAULT_DB_PATH
    assert normalize_db_path("var/db.json") == Path("var/db.json")
    assert normalize_db_path(tmp_path) == tmp_path

    target = tmp_path / "with space" / "db.json"
    assert normalize_db_path(target.as_uri()) == target

    with pytest.raises(LocalDatabaseConfigError):
        normalize_db_path("file://fileserver/share/db.json")


def test_disk_store_load_contract(tmp_path):
    store = DiskJsonDocumentStore(tmp_path / "nested" / "db.json")
    assert store.load() is None
    assert (tmp_path / "nested").is_dir()

    store.save({"files": {}})
    assert store.load() == {"files": {}}

    store.path.write_text("[]", encoding="utf-8")
    with pytest.raises(DocumentLoadError):
        store.load()
