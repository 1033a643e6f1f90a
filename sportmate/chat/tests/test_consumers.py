import asyncio
from datetime import timedelta

import pytest
from channels.db import database_sync_to_async
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth import get_user_model
from django.utils import timezone

from sportmate.chat import protocol
from sportmate.chat import store
from sportmate.chat.consumers import EventChatConsumer
from sportmate.chat.models import EventMessage
from sportmate.chat.registry import RoomRegistry
from sportmate.chat.routing import websocket_urlpatterns
from sportmate.events.models import Event
from sportmate.events.models import EventRsvp

pytestmark = [pytest.mark.asyncio, pytest.mark.django_db(transaction=True)]

TIMEOUT = 3


def make_user(username, first_name=""):
    return get_user_model().objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="testpass123",  # noqa: S106
        first_name=first_name,
        last_name="Tester",
    )


def make_event(host, title="Sunday hoops"):
    return Event.objects.create(
        host=host,
        title=title,
        sport_type="Basketball",
        skill_level="recreational",
        max_players=10,
        location_name="Rucker Park",
        event_date=timezone.now() + timedelta(days=2),
        event_time="6pm",
    )


@pytest.fixture(autouse=True)
def rooms(monkeypatch):
    fresh = RoomRegistry()
    monkeypatch.setattr(EventChatConsumer, "registry", fresh)
    return fresh


@pytest.fixture
def host():
    return make_user("host", "Hana")


@pytest.fixture
def player():
    return make_user("player", "Pete")


@pytest.fixture
def stranger():
    return make_user("stranger", "Stan")


@pytest.fixture
def event(host, player):
    event = make_event(host)
    EventRsvp.objects.create(event=event, user=player)
    return event


async def open_socket(user=None):
    communicator = WebsocketCommunicator(EventChatConsumer.as_asgi(), "/ws/chat/")
    if user is not None:
        communicator.scope["user"] = user
    connected, _ = await communicator.connect()
    assert connected
    return communicator


async def join(communicator, event_id, user_id):
    await communicator.send_json_to(
        {"type": "join-event", "eventId": event_id, "userId": user_id}
    )
    return await communicator.receive_json_from(timeout=TIMEOUT)


async def receive_type(communicator, frame_type):
    """Skip frames until one of ``frame_type`` arrives."""
    while True:
        frame = await communicator.receive_json_from(timeout=TIMEOUT)
        if frame["type"] == frame_type:
            return frame


async def test_host_joins_own_event_room(event, host, rooms):
    ws = await open_socket()

    reply = await join(ws, event.pk, host.pk)

    assert reply == {"type": "joined", "eventId": event.pk}
    assert rooms.has_room(event.pk)
    await ws.disconnect()


async def test_second_member_is_announced_to_first(event, host, player):
    host_ws = await open_socket()
    await join(host_ws, event.pk, host.pk)
    player_ws = await open_socket()

    reply = await join(player_ws, event.pk, player.pk)

    assert reply == {"type": "joined", "eventId": event.pk}
    announced = await host_ws.receive_json_from(timeout=TIMEOUT)
    assert announced == {
        "type": "user-joined",
        "user": {"id": player.pk, "firstName": "Pete", "lastName": "Tester"},
    }
    # The joiner is not told about itself.
    assert await player_ws.receive_nothing()
    await player_ws.disconnect()
    await host_ws.disconnect()


async def test_message_is_persisted_and_relayed_to_everyone(event, host, player):
    host_ws = await open_socket()
    await join(host_ws, event.pk, host.pk)
    player_ws = await open_socket()
    await join(player_ws, event.pk, player.pk)
    await host_ws.receive_json_from(timeout=TIMEOUT)  # user-joined

    await player_ws.send_json_to(
        {"type": "send-message", "eventId": event.pk, "message": "  running late  "}
    )

    to_sender = await player_ws.receive_json_from(timeout=TIMEOUT)
    to_host = await host_ws.receive_json_from(timeout=TIMEOUT)
    assert to_sender == to_host
    assert to_host["type"] == "new-message"
    assert to_host["message"] == "running late"
    assert to_host["eventId"] == event.pk
    assert to_host["userId"] == player.pk
    assert to_host["user"]["firstName"] == "Pete"

    saved = await database_sync_to_async(EventMessage.objects.get)(pk=to_host["id"])
    assert saved.message == "running late"
    assert saved.user_id == player.pk
    await player_ws.disconnect()
    await host_ws.disconnect()


async def test_blank_message_is_rejected(event, host):
    ws = await open_socket()
    await join(ws, event.pk, host.pk)

    await ws.send_json_to(
        {"type": "send-message", "eventId": event.pk, "message": "   \n\t"}
    )

    reply = await ws.receive_json_from(timeout=TIMEOUT)
    assert reply == {"type": "error", "message": protocol.EMPTY_MESSAGE}
    count = await database_sync_to_async(EventMessage.objects.count)()
    assert count == 0
    await ws.disconnect()


async def test_send_before_join_is_rejected(event):
    ws = await open_socket()

    await ws.send_json_to(
        {"type": "send-message", "eventId": event.pk, "message": "hello?"}
    )

    reply = await ws.receive_json_from(timeout=TIMEOUT)
    assert reply == {"type": "error", "message": protocol.NOT_IN_ROOM}
    await ws.disconnect()


async def test_send_to_other_room_is_rejected(event, host):
    ws = await open_socket()
    await join(ws, event.pk, host.pk)

    await ws.send_json_to(
        {"type": "send-message", "eventId": event.pk + 1, "message": "hello"}
    )

    reply = await ws.receive_json_from(timeout=TIMEOUT)
    assert reply == {"type": "error", "message": protocol.NOT_IN_ROOM}
    await ws.disconnect()


async def test_join_unknown_event(host, rooms):
    ws = await open_socket()

    reply = await join(ws, 999_999, host.pk)

    assert reply == {"type": "error", "message": protocol.EVENT_NOT_FOUND}
    assert not rooms.has_room(999_999)
    await ws.disconnect()


async def test_join_without_rsvp_is_denied(event, stranger, rooms):
    ws = await open_socket()

    reply = await join(ws, event.pk, stranger.pk)

    assert reply == {"type": "error", "message": protocol.ACCESS_DENIED}
    assert not rooms.has_room(event.pk)
    await ws.disconnect()


async def test_authenticated_socket_cannot_join_as_someone_else(event, host, player):
    ws = await open_socket(user=player)

    reply = await join(ws, event.pk, host.pk)

    assert reply == {"type": "error", "message": protocol.ACCESS_DENIED}
    await ws.disconnect()


async def test_authenticated_socket_joins_as_itself(event, player):
    ws = await open_socket(user=player)

    reply = await join(ws, event.pk, player.pk)

    assert reply == {"type": "joined", "eventId": event.pk}
    await ws.disconnect()


async def test_malformed_frame_keeps_connection_usable(event, host):
    ws = await open_socket()

    await ws.send_to(text_data="{not json")
    reply = await ws.receive_json_from(timeout=TIMEOUT)
    assert reply == {"type": "error", "message": protocol.INVALID_FORMAT}

    await ws.send_json_to({"type": "dance", "eventId": event.pk})
    reply = await ws.receive_json_from(timeout=TIMEOUT)
    assert reply == {"type": "error", "message": protocol.INVALID_FORMAT}

    assert (await join(ws, event.pk, host.pk))["type"] == "joined"
    await ws.disconnect()


async def test_failed_save_only_errors_the_sender(event, host, player, monkeypatch):
    host_ws = await open_socket()
    await join(host_ws, event.pk, host.pk)
    player_ws = await open_socket()
    await join(player_ws, event.pk, player.pk)
    await host_ws.receive_json_from(timeout=TIMEOUT)  # user-joined

    async def broken_create(event_id, user_id, text):
        msg = "database is read-only"
        raise RuntimeError(msg)

    monkeypatch.setattr(store, "create_event_message", broken_create)

    await player_ws.send_json_to(
        {"type": "send-message", "eventId": event.pk, "message": "hello"}
    )

    reply = await player_ws.receive_json_from(timeout=TIMEOUT)
    assert reply == {"type": "error", "message": protocol.SAVE_FAILED}
    assert await host_ws.receive_nothing()
    await player_ws.disconnect()
    await host_ws.disconnect()


async def test_disconnect_announces_leave_and_drops_empty_room(
    event, host, player, rooms
):
    host_ws = await open_socket()
    await join(host_ws, event.pk, host.pk)
    player_ws = await open_socket()
    await join(player_ws, event.pk, player.pk)
    await host_ws.receive_json_from(timeout=TIMEOUT)  # user-joined

    await player_ws.disconnect()

    left = await host_ws.receive_json_from(timeout=TIMEOUT)
    assert left == {
        "type": "user-left",
        "user": {"id": player.pk, "firstName": "Pete", "lastName": "Tester"},
    }
    assert [p.user_id for p in await rooms.members(event.pk)] == [host.pk]

    await host_ws.disconnect()
    assert not rooms.has_room(event.pk)


async def test_joining_another_event_leaves_the_first(event, host, player, rooms):
    other = await database_sync_to_async(make_event)(host, "Soccer scrimmage")
    host_ws = await open_socket()
    await join(host_ws, event.pk, host.pk)
    player_ws = await open_socket()
    await join(player_ws, event.pk, player.pk)
    await host_ws.receive_json_from(timeout=TIMEOUT)  # user-joined

    reply = await join(host_ws, other.pk, host.pk)

    assert reply == {"type": "joined", "eventId": other.pk}
    left = await player_ws.receive_json_from(timeout=TIMEOUT)
    assert left["type"] == "user-left"
    assert left["user"]["id"] == host.pk
    assert [p.user_id for p in await rooms.members(event.pk)] == [player.pk]
    await player_ws.disconnect()
    await host_ws.disconnect()


async def test_rejoining_same_event_is_not_announced_twice(
    event, host, player, rooms
):
    host_ws = await open_socket()
    await join(host_ws, event.pk, host.pk)
    player_ws = await open_socket()
    await join(player_ws, event.pk, player.pk)
    await host_ws.receive_json_from(timeout=TIMEOUT)  # user-joined

    reply = await join(player_ws, event.pk, player.pk)

    assert reply == {"type": "joined", "eventId": event.pk}
    assert await host_ws.receive_nothing()
    assert sorted(p.user_id for p in await rooms.members(event.pk)) == sorted(
        [host.pk, player.pk]
    )

    await player_ws.disconnect()
    left = await host_ws.receive_json_from(timeout=TIMEOUT)
    assert left["type"] == "user-left"
    assert await host_ws.receive_nothing()
    await host_ws.disconnect()


async def test_concurrent_joins_both_land_in_room(event, host, player, rooms):
    host_ws = await open_socket()
    player_ws = await open_socket()

    await asyncio.gather(
        host_ws.send_json_to(
            {"type": "join-event", "eventId": event.pk, "userId": host.pk}
        ),
        player_ws.send_json_to(
            {"type": "join-event", "eventId": event.pk, "userId": player.pk}
        ),
    )
    await receive_type(host_ws, "joined")
    await receive_type(player_ws, "joined")

    members = {p.user_id for p in await rooms.members(event.pk)}
    assert members == {host.pk, player.pk}

    await host_ws.send_json_to(
        {"type": "send-message", "eventId": event.pk, "message": "both here?"}
    )
    assert (await receive_type(player_ws, "new-message"))["message"] == "both here?"
    assert (await receive_type(host_ws, "new-message"))["message"] == "both here?"
    await player_ws.disconnect()
    await host_ws.disconnect()


async def test_relay_is_mounted_at_ws_chat(event, host):
    application = URLRouter(websocket_urlpatterns)
    ws = WebsocketCommunicator(application, "/ws/chat/")
    connected, _ = await ws.connect()
    assert connected

    assert (await join(ws, event.pk, host.pk))["type"] == "joined"
    await ws.disconnect()
