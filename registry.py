from typing import Any, Dict, List, Optional, Set

from logging_config import get_logger

logger = get_logger(__name__)


class Room:
    """One room: its members and the last full whiteboard snapshot."""

    def __init__(self, room_id: str):
        self.room_id = room_id
        self.members: Set[str] = set()
        self.snapshot: Optional[Any] = None

    @property
    def has_snapshot(self) -> bool:
        return self.snapshot is not None

    def __repr__(self):
        return f"Room(room_id={self.room_id!r}, members={len(self.members)}, has_snapshot={self.has_snapshot})"


class RoomRegistry:
    """In-memory map of room id -> Room.

    A room exists here only while it has members. Not safe to share across
    processes; every mutation must come from the single event loop.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}

    def ensure(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id)
            self._rooms[room_id] = room
            logger.info(f"Room {room_id} created (total rooms: {len(self._rooms)})")
        return room

    def get(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def remove_if_empty(self, room_id: str) -> bool:
        room = self._rooms.get(room_id)
        if room is None or room.members:
            return False
        del self._rooms[room_id]
        logger.info(f"Room {room_id} is empty, deleted (total rooms: {len(self._rooms)})")
        return True

    def room_ids(self) -> List[str]:
        return list(self._rooms)

    def clear(self):
        self._rooms.clear()

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
