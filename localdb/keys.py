from __future__ import annotations

import enum
from dataclasses import dataclass

# Callers build keys with these exact strings; do not change them.
SETTINGS_PREFIX = "manage@sysConfig@"
OPERATION_PREFIX = "manage@index@operation_"


class KeyKind(enum.Enum):
    FILE = "file"
    SETTING = "setting"
    OPERATION = "operation"


@dataclass(frozen=True)
class ClassifiedKey:
    """
    A generic-interface key resolved to its namespace.

    `ident` is the key inside that namespace: the full key for files and
    settings, the key minus OPERATION_PREFIX for queued operations.
    """

    kind: KeyKind
    key: str
    ident: str


def classify_key(key: str) -> ClassifiedKey:
    if key.startswith(SETTINGS_PREFIX):
        return ClassifiedKey(KeyKind.SETTING, key, key)
    if key.startswith(OPERATION_PREFIX):
        return ClassifiedKey(KeyKind.OPERATION, key, key[len(OPERATION_PREFIX):])
    return ClassifiedKey(KeyKind.FILE, key, key)


def operation_key(operation_id: str) -> str:
    return OPERATION_PREFIX + operation_id
