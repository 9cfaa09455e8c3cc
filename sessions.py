import asyncio
import uuid
from typing import Any, Optional, Set

from constants import USER_JOINED, USER_LEFT, WHITEBOARD_CHANGE, WHITEBOARD_STATE
from logging_config import get_logger
from registry import RoomRegistry
from relay import BroadcastRelay

logger = get_logger(__name__)


class Session:
    """Server-side identity of one connection.

    `rooms` is the session -> room index; it is only changed together with
    the matching room's member set.
    """

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.rooms: Set[str] = set()
        self.outbox: asyncio.Queue = asyncio.Queue()

    @property
    def current_room(self) -> Optional[str]:
        return next(iter(self.rooms), None)

    def __repr__(self):
        return f"Session(session_id={self.session_id!r}, rooms={sorted(self.rooms)})"


class SessionBroker:
    """Membership changes, snapshot storage and relaying for all sessions.

    Every operation is synchronous and runs to completion, so callers on the
    event loop never observe a half-applied membership change.
    """

    def __init__(self, registry: Optional[RoomRegistry] = None, relay: Optional[BroadcastRelay] = None):
        self.registry = registry or RoomRegistry()
        self.relay = relay or BroadcastRelay(self.registry)

    def connect(self, session_id: Optional[str] = None) -> Session:
        session = Session(session_id)
        self.relay.attach(session)
        logger.info(f"User connected: {session.session_id}")
        return session

    def join(self, session: Session, room_id: str):
        # One room per session: moving to another room leaves the old one
        for previous_room in list(session.rooms):
            if previous_room != room_id:
                self.leave(session, previous_room)

        room = self.registry.ensure(room_id)
        if session.session_id in room.members:
            logger.debug(f"User {session.session_id} already in room {room_id}")
            return

        room.members.add(session.session_id)
        session.rooms.add(room_id)
        logger.info(f"User {session.session_id} joined room {room_id} (members: {len(room.members)})")

        if room.has_snapshot:
            self.relay.deliver(session.session_id, WHITEBOARD_STATE, room.snapshot)

        self.relay.relay(room_id, USER_JOINED, session.session_id, exclude_session=session.session_id)

    def leave(self, session: Session, room_id: str):
        room = self.registry.get(room_id)
        session.rooms.discard(room_id)
        if room is None or session.session_id not in room.members:
            logger.debug(f"User {session.session_id} is not in room {room_id}, nothing to leave")
            return

        room.members.discard(session.session_id)
        logger.info(f"User {session.session_id} left room {room_id} (members: {len(room.members)})")
        self.relay.relay(room_id, USER_LEFT, session.session_id, exclude_session=session.session_id)
        self.registry.remove_if_empty(room_id)

    def change(self, session: Session, payload: Any) -> bool:
        """Store payload as the room snapshot and relay it to the other members.

        Returns False when the session is in no room; the change is dropped.
        """
        room_id = session.current_room
        room = self.registry.get(room_id) if room_id is not None else None
        if room is None:
            logger.debug(f"Dropping whiteboard change from {session.session_id}: not in a room")
            return False

        room.snapshot = payload
        self.relay.relay(room_id, WHITEBOARD_CHANGE, payload, exclude_session=session.session_id)
        return True

    def disconnect(self, session: Session):
        for room_id in list(session.rooms):
            self.leave(session, room_id)
        self.relay.detach(session.session_id)
        logger.info(f"User disconnected: {session.session_id}")
