from typing import TYPE_CHECKING, Any, Dict, Optional

from logging_config import get_logger
from registry import RoomRegistry
from schemas.messages import ServerMessage

if TYPE_CHECKING:
    from sessions import Session

logger = get_logger(__name__)


class BroadcastRelay:
    """Fans messages out to room members through their outbound queues.

    Delivery never awaits: messages are put on each session's outbox and a
    per-connection writer drains it to the socket in order.
    """

    def __init__(self, registry: RoomRegistry):
        self.registry = registry
        # Format: {session_id: Session}
        self._sessions: Dict[str, "Session"] = {}

    def attach(self, session: "Session"):
        self._sessions[session.session_id] = session
        logger.debug(f"Attached session {session.session_id} (attached sessions: {len(self._sessions)})")

    def detach(self, session_id: str):
        if self._sessions.pop(session_id, None) is not None:
            logger.debug(f"Detached session {session_id} (attached sessions: {len(self._sessions)})")

    def is_attached(self, session_id: str) -> bool:
        return session_id in self._sessions

    def deliver(self, session_id: str, event: str, data: Any = None) -> bool:
        """Queue one message for a single session."""
        session = self._sessions.get(session_id)
        if session is None:
            logger.debug(f"Dropping {event} for unknown session {session_id}")
            return False
        session.outbox.put_nowait(ServerMessage(event=event, data=data))
        return True

    def relay(self, room_id: str, event: str, data: Any = None, exclude_session: Optional[str] = None) -> int:
        """Queue a message for every member of a room except exclude_session.

        Returns the number of sessions the message was queued for.
        """
        room = self.registry.get(room_id)
        if room is None:
            return 0

        delivered = 0
        for member_id in list(room.members):
            if member_id == exclude_session:
                continue
            if self.deliver(member_id, event, data):
                delivered += 1
        logger.debug(f"Relayed {event} in room {room_id} to {delivered} sessions")
        return delivered

