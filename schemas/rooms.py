from pydantic import BaseModel
from typing import Any, Optional


class RoomSummary(BaseModel):
    room_id: str
    member_count: int
    has_snapshot: bool

class RoomListResponse(BaseModel):
    rooms: list[RoomSummary]

class RoomDetailsResponse(BaseModel):
    room_id: str
    members: list[str]
    member_count: int
    has_snapshot: bool

class RoomSnapshotResponse(BaseModel):
    room_id: str
    snapshot: Optional[Any] = None
