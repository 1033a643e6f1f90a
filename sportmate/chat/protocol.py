"""Frames exchanged with the event chat relay.

Every frame is a JSON object tagged by ``type``. Inbound frames are parsed
into ``JoinEvent`` or ``SendMessage``; anything else is a ``ProtocolError``.
Outbound frames render themselves with ``to_payload()``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any
from typing import ClassVar

from rest_framework import serializers

if TYPE_CHECKING:
    from sportmate.chat.models import EventMessage
    from sportmate.chat.registry import Participant

INVALID_FORMAT = "Invalid message format"
EVENT_NOT_FOUND = "Event not found"
ACCESS_DENIED = "Access denied to event chat"
NOT_IN_ROOM = "Join an event chat before sending messages"
EMPTY_MESSAGE = "Message cannot be empty"
SAVE_FAILED = "Failed to save message"


class ProtocolError(Exception):
    def __init__(self, message: str = INVALID_FORMAT):
        super().__init__(message)
        self.message = message


class JoinEventSerializer(serializers.Serializer):
    eventId = serializers.IntegerField(min_value=1)  # noqa: N815
    userId = serializers.IntegerField(min_value=1)  # noqa: N815


class SendMessageSerializer(serializers.Serializer):
    eventId = serializers.IntegerField(min_value=1)  # noqa: N815
    # Trimming and the emptiness check happen in the relay.
    message = serializers.CharField(
        allow_blank=True, trim_whitespace=False, max_length=2000
    )


@dataclass(frozen=True)
class JoinEvent:
    event_id: int
    user_id: int


@dataclass(frozen=True)
class SendMessage:
    event_id: int
    message: str


InboundFrame = JoinEvent | SendMessage


@dataclass(frozen=True)
class Joined:
    type: ClassVar[str] = "joined"
    event_id: int

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "eventId": self.event_id}


@dataclass(frozen=True)
class Error:
    type: ClassVar[str] = "error"
    message: str

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "message": self.message}


@dataclass(frozen=True)
class NewMessage:
    type: ClassVar[str] = "new-message"
    record: EventMessage
    author: Participant

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.record.pk,
            "eventId": self.record.event_id,
            "userId": self.record.user_id,
            "message": self.record.message,
            "createdAt": self.record.created_at.isoformat(),
            "user": self.author.as_author(),
        }


@dataclass(frozen=True)
class UserJoined:
    type: ClassVar[str] = "user-joined"
    user: Participant

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "user": self.user.as_presence()}


@dataclass(frozen=True)
class UserLeft:
    type: ClassVar[str] = "user-left"
    user: Participant

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "user": self.user.as_presence()}


def _first_error(errors: dict[str, Any]) -> str:
    for field_name, messages in errors.items():
        if isinstance(messages, list) and messages:
            return f"{field_name}: {messages[0]}"
    return INVALID_FORMAT


def parse_frame(text: str | bytes | None) -> InboundFrame:
    if text is None:
        raise ProtocolError
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ProtocolError from exc
    if not isinstance(data, dict):
        raise ProtocolError

    frame_type = data.get("type")
    if frame_type == "join-event":
        serializer = JoinEventSerializer(data=data)
        if not serializer.is_valid():
            raise ProtocolError(_first_error(serializer.errors))
        return JoinEvent(
            event_id=serializer.validated_data["eventId"],
            user_id=serializer.validated_data["userId"],
        )
    if frame_type == "send-message":
        serializer = SendMessageSerializer(data=data)
        if not serializer.is_valid():
            raise ProtocolError(_first_error(serializer.errors))
        return SendMessage(
            event_id=serializer.validated_data["eventId"],
            message=serializer.validated_data["message"],
        )
    raise ProtocolError
