"""
orderdesk.middleware.paths

Path and header matching shared by the middleware stages.
"""

from __future__ import annotations

from collections.abc import Iterable

JSON_MEDIA_TYPE = "application/json"


def path_matches(path: str, prefix: str, *, include_root: bool = False) -> bool:
    """
    Segment-aware prefix match with route-style prefixes (`api/`).

    Both sides are compared with surrounding slashes trimmed, so `api/` covers
    `/api/users` but not `/api`, `/api/` or `/apiv2/users`. With
    `include_root=True` the prefix path itself (`/api/admin`, `/api/admin/`)
    matches too.
    """

    trimmed = path.strip("/")
    root = prefix.strip("/")
    if not root:
        return True
    if include_root and trimmed == root:
        return True
    return trimmed.startswith(root + "/")


def path_matches_any(path: str, prefixes: Iterable[str], *, include_root: bool = False) -> bool:
    return any(path_matches(path, p, include_root=include_root) for p in prefixes)


def is_json_content_type(value: str | None, *, strict: bool = True) -> bool:
    if value is None:
        return False
    if strict:
        return value == JSON_MEDIA_TYPE
    media_type, _, _ = value.partition(";")
    return media_type.strip().lower() == JSON_MEDIA_TYPE
