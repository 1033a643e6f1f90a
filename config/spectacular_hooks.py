"""drf-spectacular post-processing: one navigation tag per API area."""

from __future__ import annotations

from typing import Any

_HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options", "head"}

PATTERN_TAGS = [
    (lambda p: p.startswith("/api/v1/auth/jwt/"), "JWT Authentication"),
    (lambda p: p.startswith("/api/v1/auth/"), "Authentication"),
    (lambda p: p.startswith("/api/v1/users/"), "Users"),
    (lambda p: p.startswith("/api/v1/events/") and "/messages" in p, "Chat"),
    (lambda p: p.startswith("/api/v1/events/"), "Events"),
    (lambda p: p.startswith("/api/v1/verification/"), "Verification"),
    (lambda p: p.startswith("/api/v1/locations/"), "Locations"),
    (lambda p: p.startswith("/api/v1/notifications/"), "Notifications"),
    (lambda p: p.startswith("/api/v1/admin/"), "Admin"),
    (lambda p: p in ("/api/v1/schema/", "/api/v1/mapbox-token/"), "Meta"),
]

ALL_TAGS = list(dict.fromkeys(tag for _, tag in PATTERN_TAGS))


def assign_group_tag(path: str) -> str | None:
    for pred, tag in PATTERN_TAGS:
        if pred(path):
            return tag
    return None


def group_tags(result: dict[str, Any], generator=None, request=None, public=None):
    """Overwrite each operation's tags with exactly one group."""
    for path, path_item in result.get("paths", {}).items():
        tag = assign_group_tag(path)
        if not tag:
            continue
        for method, operation in path_item.items():
            if method.lower() in _HTTP_METHODS and isinstance(operation, dict):
                operation["tags"] = [tag]

    existing = {t.get("name") for t in result.get("tags", [])}
    tag_list = result.setdefault("tags", [])
    tag_list.extend({"name": tag} for tag in ALL_TAGS if tag not in existing)
    return result
