"""Socket.IO server for per-user pushes (notifications).

Clients connect on ``/ws/notifications/`` with a JWT access token, either as
``?token=`` or in the Socket.IO ``auth`` payload. Every accepted socket sits
in ``user_<id>``; sync Django code pushes to it with ``emit_event_to_user``.
With ``REDIS_URL`` set, emits fan out through Redis so any worker can send.
"""

from __future__ import annotations

import logging
from typing import Any

import socketio
from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from sportmate.realtime.auth import get_user_for_token
from sportmate.realtime.auth import token_from_scope

logger = logging.getLogger(__name__)


def _client_manager():
    redis_url = getattr(settings, "REDIS_URL", "")
    if redis_url:
        return socketio.AsyncRedisManager(redis_url)
    return None


sio = socketio.AsyncServer(
    async_mode="asgi",
    client_manager=_client_manager(),
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
)


def room_for_user(user_id: int) -> str:
    return f"user_{int(user_id)}"


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    scope = environ.get("asgi.scope") if isinstance(environ, dict) else None
    if not isinstance(scope, dict):
        # WSGI-style environ from some servers
        qs = environ.get("QUERY_STRING", "") if isinstance(environ, dict) else ""
        scope = {"query_string": qs}
    token = token_from_scope(scope)
    if token:
        return token
    if isinstance(auth, dict) and isinstance(auth.get("token"), str):
        return auth["token"] or None
    return None


def _is_expired(token: str) -> bool:
    try:
        unverified = AccessToken(token, verify=False)
    except TokenError:
        return False
    try:
        unverified.check_exp()
    except TokenError:
        return True
    return False


async def _user_id_for_token(token: str) -> int:
    """Resolve the token to a user id or refuse with a client-readable reason.

    The frontend refreshes its access token on ``jwt_expired`` and gives up on
    ``unauthorized``.
    """
    try:
        user = await get_user_for_token(token, strict=True)
    except (TokenError, AuthenticationFailed) as exc:
        reason = "jwt_expired" if _is_expired(token) else "unauthorized"
        raise ConnectionRefusedError(reason) from exc
    except Exception as exc:
        logger.exception("Socket.IO token check failed")
        msg = "server_error"
        raise ConnectionRefusedError(msg) from exc
    return int(user.pk)


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    user_id = await _user_id_for_token(token)
    await sio.save_session(sid, {"user_id": user_id})
    await sio.enter_room(sid, room_for_user(user_id))
    logger.debug("Socket %s joined %s", sid, room_for_user(user_id))


@sio.event
async def disconnect(sid: str):
    logger.debug("Socket %s disconnected", sid)


def emit_event_to_room(room: str, event: str, payload: dict[str, Any]) -> None:
    """Emit from sync Django code (signals, services)."""
    async_to_sync(sio.emit)(event, payload, room=room)


def emit_event_to_user(user_id: int, event: str, payload: dict[str, Any]) -> None:
    emit_event_to_room(room_for_user(user_id), event, payload)
