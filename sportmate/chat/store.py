"""Async persistence calls used by the chat relay.

Each call runs in its own worker thread (``thread_sensitive=False``) so one
slow query does not hold up the other connections.
"""

from __future__ import annotations

from channels.db import database_sync_to_async

from sportmate.chat.models import EventMessage
from sportmate.events.models import Event
from sportmate.events.models import EventRsvp
from sportmate.events.services import is_event_participant
from sportmate.users.models import User


def _get_event_by_id(event_id: int) -> Event | None:
    return Event.objects.filter(pk=event_id).first()


def _get_rsvps_by_user(user_id: int) -> list[EventRsvp]:
    """Every RSVP the user holds, for async callers listing a user's chats.

    Join checks go through ``is_eligible`` instead, which asks about one event.
    """
    return list(EventRsvp.objects.filter(user_id=user_id))


def _get_user(user_id: int) -> User | None:
    return User.objects.filter(pk=user_id).first()


def _create_event_message(event_id: int, user_id: int, text: str) -> EventMessage:
    return EventMessage.objects.create(event_id=event_id, user_id=user_id, message=text)


get_event_by_id = database_sync_to_async(_get_event_by_id, thread_sensitive=False)
get_rsvps_by_user = database_sync_to_async(
    _get_rsvps_by_user, thread_sensitive=False
)
get_user = database_sync_to_async(_get_user, thread_sensitive=False)
create_event_message = database_sync_to_async(
    _create_event_message, thread_sensitive=False
)
is_eligible = database_sync_to_async(is_event_participant, thread_sensitive=False)
