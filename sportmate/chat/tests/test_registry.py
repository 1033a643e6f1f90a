import asyncio

import pytest

from sportmate.chat.registry import Participant
from sportmate.chat.registry import RoomRegistry

pytestmark = pytest.mark.asyncio


class FakeConnection:
    def __init__(self, name, *, fail=False):
        self.name = name
        self.is_open = True
        self.fail = fail
        self.received = []

    def __repr__(self):
        return f"<FakeConnection {self.name}>"

    async def send_json(self, content):
        await asyncio.sleep(0)
        if self.fail:
            msg = "socket gone"
            raise ConnectionResetError(msg)
        self.received.append(content)


def participant(user_id):
    return Participant(user_id=user_id, first_name=f"User{user_id}", last_name="X")


async def test_first_register_creates_room():
    registry = RoomRegistry()
    conn = FakeConnection("a")

    assert not registry.has_room(7)
    previous = await registry.register(7, conn, participant(1))

    assert previous is None
    assert registry.has_room(7)
    assert registry.room_for(conn) == 7
    assert await registry.members(7) == [participant(1)]


async def test_unregister_last_member_drops_room():
    registry = RoomRegistry()
    a, b = FakeConnection("a"), FakeConnection("b")
    await registry.register(7, a, participant(1))
    await registry.register(7, b, participant(2))

    assert await registry.unregister(a) == (7, participant(1))
    assert registry.has_room(7)

    assert await registry.unregister(b) == (7, participant(2))
    assert not registry.has_room(7)
    assert registry.room_for(b) is None


async def test_unregister_unknown_connection_is_noop():
    registry = RoomRegistry()
    assert await registry.unregister(FakeConnection("ghost")) is None


async def test_register_elsewhere_moves_connection():
    registry = RoomRegistry()
    conn = FakeConnection("a")
    await registry.register(1, conn, participant(5))

    previous = await registry.register(2, conn, participant(5))

    assert previous == (1, participant(5))
    assert not registry.has_room(1)
    assert registry.room_for(conn) == 2


async def test_register_same_room_twice_keeps_single_membership():
    registry = RoomRegistry()
    conn = FakeConnection("a")
    await registry.register(1, conn, participant(5))
    previous = await registry.register(1, conn, participant(5))

    assert previous is None
    assert await registry.members(1) == [participant(5)]


async def test_broadcast_reaches_members_except_excluded():
    registry = RoomRegistry()
    a, b, c = FakeConnection("a"), FakeConnection("b"), FakeConnection("c")
    for i, conn in enumerate((a, b, c), start=1):
        await registry.register(3, conn, participant(i))

    delivered = await registry.broadcast(3, {"type": "ping"}, exclude=a)

    assert delivered == 2
    assert a.received == []
    assert b.received == [{"type": "ping"}]
    assert c.received == [{"type": "ping"}]


async def test_broadcast_skips_closed_and_survives_failed_send():
    registry = RoomRegistry()
    ok = FakeConnection("ok")
    closed = FakeConnection("closed")
    broken = FakeConnection("broken", fail=True)
    await registry.register(3, ok, participant(1))
    await registry.register(3, closed, participant(2))
    await registry.register(3, broken, participant(3))
    closed.is_open = False

    delivered = await registry.broadcast(3, {"type": "ping"})

    assert delivered == 1
    assert ok.received == [{"type": "ping"}]
    assert closed.received == []


async def test_broadcast_to_missing_room_delivers_nothing():
    registry = RoomRegistry()
    assert await registry.broadcast(99, {"type": "ping"}) == 0


async def test_rooms_are_isolated():
    registry = RoomRegistry()
    a, b = FakeConnection("a"), FakeConnection("b")
    await registry.register(1, a, participant(1))
    await registry.register(2, b, participant(2))

    await registry.broadcast(1, {"type": "ping", "room": 1})

    assert a.received == [{"type": "ping", "room": 1}]
    assert b.received == []


async def test_concurrent_broadcasts_arrive_in_same_order_everywhere():
    registry = RoomRegistry()
    conns = [FakeConnection(str(i)) for i in range(4)]
    for i, conn in enumerate(conns, start=1):
        await registry.register(4, conn, participant(i))

    await asyncio.gather(
        *(registry.broadcast(4, {"type": "n", "seq": seq}) for seq in range(20))
    )

    first = conns[0].received
    assert len(first) == 20  # noqa: PLR2004
    for conn in conns[1:]:
        assert conn.received == first


async def test_join_racing_last_leave_lands_in_live_room():
    registry = RoomRegistry()
    leaving, joining = FakeConnection("leaving"), FakeConnection("joining")
    await registry.register(8, leaving, participant(1))

    await asyncio.gather(
        registry.unregister(leaving),
        registry.register(8, joining, participant(2)),
    )

    assert registry.has_room(8)
    assert await registry.members(8) == [participant(2)]
    assert await registry.broadcast(8, {"type": "ping"}) == 1


async def test_concurrent_registers_both_become_members():
    registry = RoomRegistry()
    a, b = FakeConnection("a"), FakeConnection("b")

    await asyncio.gather(
        registry.register(5, a, participant(1)),
        registry.register(5, b, participant(2)),
    )

    members = {p.user_id for p in await registry.members(5)}
    assert members == {1, 2}
    assert await registry.broadcast(5, {"type": "ping"}) == 2  # noqa: PLR2004
    assert a.received == b.received == [{"type": "ping"}]
