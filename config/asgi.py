"""
ASGI entry point.

Layout, outermost first:
- Socket.IO at ``/ws/notifications/`` (per-user pushes; needs both Engine.IO
  long-polling and WebSocket upgrades, so it wraps everything else)
- Channels ``ProtocolTypeRouter``: HTTP to Django, WebSocket to the event
  chat relay at ``/ws/chat/``
"""

from django.core.asgi import get_asgi_application

from config import use_default_settings

use_default_settings()

# Populate the app registry before importing consumers and models.
django_application = get_asgi_application()

from channels.routing import ProtocolTypeRouter  # noqa: E402
from channels.routing import URLRouter  # noqa: E402
from socketio import ASGIApp  # noqa: E402

from sportmate.chat.routing import websocket_urlpatterns  # noqa: E402
from sportmate.realtime.auth import JWTAuthMiddleware  # noqa: E402
from sportmate.realtime.socketio import sio  # noqa: E402

channels_application = ProtocolTypeRouter(
    {
        "http": django_application,
        "websocket": JWTAuthMiddleware(URLRouter(websocket_urlpatterns)),
    }
)

application = ASGIApp(
    sio,
    other_asgi_app=channels_application,
    socketio_path="ws/notifications",
)
