"""WebSocket routes for the event chat relay.

The relay lives at ``/ws/chat/`` rather than a bare ``/ws`` so it can share
the ASGI app with Socket.IO on ``/ws/notifications/``. Clients must connect
to ``/ws/chat/``.
"""

from django.urls import path

from . import consumers

websocket_urlpatterns = [
    path("ws/chat/", consumers.EventChatConsumer.as_asgi()),
]
