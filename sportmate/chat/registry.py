"""In-memory room registry for the event chat relay.

A room is keyed by event id and exists only while it has members: it is
created by the first ``register`` and dropped by the ``unregister`` that
empties it. Each room carries its own ``asyncio.Lock``; rooms never share one.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Protocol

logger = logging.getLogger(__name__)


class Connection(Protocol):
    is_open: bool

    async def send_json(self, content: dict[str, Any]) -> None: ...


@dataclass(frozen=True)
class Participant:
    user_id: int
    first_name: str = ""
    last_name: str = ""
    profile_image_url: str = ""

    @classmethod
    def from_user(cls, user) -> Participant:
        return cls(
            user_id=user.pk,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            profile_image_url=user.profile_image_url or "",
        )

    def as_presence(self) -> dict[str, Any]:
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    def as_author(self) -> dict[str, Any]:
        return {**self.as_presence(), "profileImageUrl": self.profile_image_url}


@dataclass
class _Room:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    members: dict[Connection, Participant] = field(default_factory=dict)
    # Set once the room has been emptied and dropped from the registry.
    closed: bool = False


class RoomRegistry:
    def __init__(self) -> None:
        self._rooms: dict[int, _Room] = {}
        self._index: dict[Connection, int] = {}

    def has_room(self, event_id: int) -> bool:
        return event_id in self._rooms

    def room_for(self, connection: Connection) -> int | None:
        return self._index.get(connection)

    async def register(
        self,
        event_id: int,
        connection: Connection,
        participant: Participant,
    ) -> tuple[int, Participant] | None:
        """File ``connection`` under ``event_id``.

        A connection lives in one room at most, so one filed elsewhere is
        moved. Returns the ``(event_id, participant)`` it was moved out of,
        or ``None``.
        """
        previous = None
        current = self._index.get(connection)
        if current is not None and current != event_id:
            previous = await self.unregister(connection)

        while True:
            room = self._rooms.setdefault(event_id, _Room())
            async with room.lock:
                if room.closed:
                    # Emptied and dropped while we waited; use the fresh entry.
                    continue
                room.members[connection] = participant
                self._index[connection] = event_id
                logger.debug(
                    "User %s joined room %s (%s online)",
                    participant.user_id,
                    event_id,
                    len(room.members),
                )
                return previous

    async def unregister(
        self, connection: Connection
    ) -> tuple[int, Participant] | None:
        event_id = self._index.get(connection)
        if event_id is None:
            return None
        room = self._rooms.get(event_id)
        if room is None:
            self._index.pop(connection, None)
            return None

        async with room.lock:
            participant = room.members.pop(connection, None)
            if self._index.get(connection) == event_id:
                del self._index[connection]
            if not room.members:
                room.closed = True
                if self._rooms.get(event_id) is room:
                    del self._rooms[event_id]
                logger.debug("Room %s is empty, dropped", event_id)

        if participant is None:
            return None
        return event_id, participant

    async def broadcast(
        self,
        event_id: int,
        payload: dict[str, Any],
        exclude: Connection | None = None,
    ) -> int:
        """Send ``payload`` to every open member except ``exclude``.

        Closed connections are skipped. A failed send is logged and does not
        stop delivery to the others. Returns the number of members reached.
        """
        room = self._rooms.get(event_id)
        if room is None:
            return 0

        async with room.lock:
            targets = [
                connection
                for connection in room.members
                if connection is not exclude and connection.is_open
            ]
            results = await asyncio.gather(
                *(connection.send_json(payload) for connection in targets),
                return_exceptions=True,
            )

        delivered = 0
        for connection, result in zip(targets, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "Dropped %s frame for %r in room %s: %s",
                    payload.get("type"),
                    connection,
                    event_id,
                    result,
                )
                continue
            delivered += 1
        return delivered

    async def members(self, event_id: int) -> list[Participant]:
        room = self._rooms.get(event_id)
        if room is None:
            return []
        async with room.lock:
            return list(room.members.values())


registry = RoomRegistry()
