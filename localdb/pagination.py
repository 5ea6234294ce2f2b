from __future__ import annotations

from typing import Iterable, NamedTuple

DEFAULT_LIST_LIMIT = 1000


class KeyPage(NamedTuple):
    names: list[str]
    cursor: str | None
    has_more: bool


def resolve_limit(limit: int | None) -> int:
    """None and 0 both mean "use the default page size"."""
    if limit is None or limit == 0:
        return DEFAULT_LIST_LIMIT
    if limit < 0:
        raise ValueError(f"limit must be positive, got {limit}")
    return limit


def prefixed_sorted(names: Iterable[str], prefix: str = "") -> list[str]:
    return sorted(n for n in names if n.startswith(prefix))


def page_after(names: list[str], *, limit: int, cursor: str | None = None) -> KeyPage:
    """
    Slice one page out of an already sorted key list.

    The page starts right after `cursor`. A cursor that is not in `names`
    (deleted key, cursor from another listing) restarts from the first key
    instead of failing; callers paging through a mutating namespace may see
    keys twice.
    """
    start = 0
    if cursor:
        try:
            start = names.index(cursor) + 1
        except ValueError:
            start = 0
    window = names[start:start + limit + 1]
    has_more = len(window) > limit
    page = window[:limit]
    return KeyPage(page, page[-1] if has_more else None, has_more)
