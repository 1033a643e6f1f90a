"""Realtime infrastructure.

Two transports share one ASGI process: the raw WebSocket event chat relay
(Channels, see ``sportmate.chat``) and a Socket.IO server for per-user pushes.
"""
