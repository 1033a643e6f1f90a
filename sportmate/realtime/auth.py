"""Bearer-token authentication for Channels WebSocket routes.

The token comes from ``?token=`` (browsers cannot set headers on a WebSocket
handshake) or an ``Authorization: Bearer`` header. A missing or invalid token
leaves the connection anonymous; consumers decide what anonymous users may do.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

logger = logging.getLogger(__name__)


def token_from_scope(scope) -> str | None:
    query_string = scope.get("query_string", b"")
    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")
    token = parse_qs(query_string).get("token", [None])[0]
    if token:
        return token

    for name, value in scope.get("headers", []):
        if name.lower() == b"authorization":
            parts = value.decode(errors="ignore").split()
            if len(parts) == 2 and parts[0].lower() == "bearer":  # noqa: PLR2004
                return parts[1]
    return None


@database_sync_to_async
def get_user_for_token(token: str, *, strict: bool = False):
    """Return the token's user.

    Invalid tokens give ``AnonymousUser``, or raise when ``strict`` is set.
    """
    jwt_auth = JWTAuthentication()
    try:
        validated = jwt_auth.get_validated_token(token)
        return jwt_auth.get_user(validated)
    except (TokenError, AuthenticationFailed) as exc:
        # InvalidToken subclasses AuthenticationFailed.
        if strict:
            raise
        logger.info("Rejected WebSocket token: %s", exc)
        return AnonymousUser()


class JWTAuthMiddleware(BaseMiddleware):
    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        token = token_from_scope(scope)
        scope["user"] = await get_user_for_token(token) if token else AnonymousUser()
        return await super().__call__(scope, receive, send)
