from fastapi import APIRouter, HTTPException, Request
from schemas.rooms import RoomDetailsResponse, RoomListResponse, RoomSnapshotResponse, RoomSummary
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


def _get_room_or_404(request: Request, room_id: str):
    room = request.app.state.broker.registry.get(room_id)
    if room is None:
        logger.info(f"Room lookup failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@rooms_router.get("", response_model=RoomListResponse)
async def list_rooms(request: Request):
    """List all live rooms. A room is live while it has at least one member."""
    registry = request.app.state.broker.registry
    summaries = []
    for room_id in registry.room_ids():
        room = registry.get(room_id)
        summaries.append(RoomSummary(
            room_id=room_id,
            member_count=len(room.members),
            has_snapshot=room.has_snapshot,
        ))
    logger.debug(f"Listing {len(summaries)} rooms")
    return RoomListResponse(rooms=summaries)


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    room = _get_room_or_404(request, room_id)
    return RoomDetailsResponse(
        room_id=room_id,
        members=sorted(room.members),
        member_count=len(room.members),
        has_snapshot=room.has_snapshot,
    )


@rooms_router.get("/{room_id}/snapshot", response_model=RoomSnapshotResponse)
async def get_room_snapshot(room_id: str, request: Request):
    """Return the stored whiteboard snapshot verbatim (null when none was sent yet)."""
    room = _get_room_or_404(request, room_id)
    return RoomSnapshotResponse(room_id=room_id, snapshot=room.snapshot)
