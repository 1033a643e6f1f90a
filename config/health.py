"""Liveness/readiness probe for load balancers and compose healthchecks."""

from __future__ import annotations

import logging
from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def check_db() -> dict[str, Any]:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Health check: database unavailable: %s", exc)
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


def check_redis() -> dict[str, Any]:
    url = getattr(settings, "REDIS_URL", "")
    if not url:
        # Single-process deployment: Socket.IO runs on its in-memory manager.
        return {"ok": True, "enabled": False}
    try:
        client = redis.Redis.from_url(
            url,
            socket_timeout=0.5,
            socket_connect_timeout=0.5,
        )
        client.ping()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Health check: redis unavailable: %s", exc)
        return {"ok": False, "enabled": True, "error": str(exc)}
    return {"ok": True, "enabled": True}


def health(request):
    components = {"db": check_db(), "redis": check_redis()}

    all_ok = all(v.get("ok", False) for v in components.values())
    some_ok = any(v.get("ok", False) for v in components.values())

    status = "ok" if all_ok else ("degraded" if some_ok else "down")
    return JsonResponse(
        {"status": status, "components": components},
        status=200 if all_ok else 503,
    )
