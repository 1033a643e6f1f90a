"""WebSocket relay for per-event chat rooms.

Clients connect to ``/ws/chat/`` and talk the JSON protocol in
``sportmate.chat.protocol``: a ``join-event`` frame files the connection under
an event room, ``send-message`` frames are persisted and then relayed to every
member of that room, and closing the socket leaves the room.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from sportmate.chat import protocol
from sportmate.chat import store
from sportmate.chat.registry import Participant
from sportmate.chat.registry import registry

logger = logging.getLogger(__name__)


class ConnectionState(enum.StrEnum):
    CONNECTED = "connected"
    AWAITING_JOIN = "awaiting_join"
    IN_ROOM = "in_room"
    CLOSED = "closed"


class EventChatConsumer(AsyncJsonWebsocketConsumer):
    registry = registry
    store = store

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = ConnectionState.CONNECTED
        self.event_id: int | None = None
        self.participant: Participant | None = None

    def __repr__(self):
        user_id = self.participant.user_id if self.participant else None
        return f"<EventChatConsumer user={user_id} event={self.event_id}>"

    @property
    def is_open(self) -> bool:
        return self.state in (ConnectionState.AWAITING_JOIN, ConnectionState.IN_ROOM)

    @property
    def authenticated_user_id(self) -> int | None:
        user = self.scope.get("user")
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return user.pk

    async def connect(self):
        await self.accept()
        self.state = ConnectionState.AWAITING_JOIN

    async def disconnect(self, code):
        if self.state == ConnectionState.IN_ROOM:
            await self._leave_room()
        self.state = ConnectionState.CLOSED

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        try:
            frame = protocol.parse_frame(
                text_data if text_data is not None else bytes_data
            )
        except protocol.ProtocolError as exc:
            await self.send_error(exc.message)
            return

        try:
            if isinstance(frame, protocol.JoinEvent):
                await self.handle_join(frame)
            elif isinstance(frame, protocol.SendMessage):
                await self.handle_send(frame)
        except Exception:
            logger.exception("Chat frame from %r failed", self)
            await self.send_error(protocol.INVALID_FORMAT)

    async def send_error(self, message: str) -> None:
        await self.send_json(protocol.Error(message).to_payload())

    async def handle_join(self, frame: protocol.JoinEvent) -> None:
        event = await self.store.get_event_by_id(frame.event_id)
        if event is None:
            await self.send_error(protocol.EVENT_NOT_FOUND)
            return

        auth_user_id = self.authenticated_user_id
        if auth_user_id is not None and auth_user_id != frame.user_id:
            logger.warning(
                "User %s tried to join event %s as user %s",
                auth_user_id,
                frame.event_id,
                frame.user_id,
            )
            await self.send_error(protocol.ACCESS_DENIED)
            return

        if not await self.store.is_eligible(event, frame.user_id):
            await self.send_error(protocol.ACCESS_DENIED)
            return

        user = await self.store.get_user(frame.user_id)
        if user is None:
            await self.send_error(protocol.ACCESS_DENIED)
            return

        participant = Participant.from_user(user)
        rejoin = self.state == ConnectionState.IN_ROOM and self.event_id == event.pk
        previous = await self.registry.register(event.pk, self, participant)
        if previous is not None:
            old_event_id, old_participant = previous
            await self.registry.broadcast(
                old_event_id, protocol.UserLeft(old_participant).to_payload()
            )

        self.event_id = event.pk
        self.participant = participant
        self.state = ConnectionState.IN_ROOM

        await self.send_json(protocol.Joined(event.pk).to_payload())
        if rejoin:
            # Already announced to this room; one user-left will follow.
            logger.debug(
                "User %s re-joined chat for event %s", participant.user_id, event.pk
            )
            return
        logger.info("User %s joined chat for event %s", participant.user_id, event.pk)
        await self.registry.broadcast(
            event.pk, protocol.UserJoined(participant).to_payload(), exclude=self
        )

    async def handle_send(self, frame: protocol.SendMessage) -> None:
        if self.state != ConnectionState.IN_ROOM or frame.event_id != self.event_id:
            await self.send_error(protocol.NOT_IN_ROOM)
            return

        text = frame.message.strip()
        if not text:
            await self.send_error(protocol.EMPTY_MESSAGE)
            return

        try:
            record = await self.store.create_event_message(
                self.event_id, self.participant.user_id, text
            )
        except Exception:
            logger.exception(
                "Saving chat message for event %s by user %s failed",
                self.event_id,
                self.participant.user_id,
            )
            await self.send_error(protocol.SAVE_FAILED)
            return

        payload: dict[str, Any] = protocol.NewMessage(
            record, self.participant
        ).to_payload()
        await self.registry.broadcast(self.event_id, payload)

    async def _leave_room(self) -> None:
        removed = await self.registry.unregister(self)
        self.event_id = None
        if removed is None:
            return
        event_id, participant = removed
        logger.info("User %s left chat for event %s", participant.user_id, event_id)
        await self.registry.broadcast(
            event_id, protocol.UserLeft(participant).to_payload()
        )
