"""Room API endpoints (session auth)."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from cliproom.api.deps import require_session_identity
from cliproom.database import get_session
from cliproom.errors import ValidationError
from cliproom.schemas.common import MessageResponse
from cliproom.schemas.room import (
    OwnerInfo,
    RoomActionRequest,
    RoomCreateRequest,
    RoomDetailResponse,
    RoomJoinRequest,
    RoomJoinResponse,
    RoomListResponse,
    RoomMemberResponse,
    RoomResponse,
)
from cliproom.services import room_service
from cliproom.services.room_service import RoomDetail, RoomSummary
from cliproom.utils.security import Identity

router = APIRouter(prefix="/rooms", tags=["rooms"])


def _room_to_response(summary: RoomSummary) -> RoomResponse:
    room = summary.room
    return RoomResponse(
        id=room.id,
        name=room.name,
        description=room.description,
        code=room.code,
        owner_id=room.owner_id,
        owner=OwnerInfo(username=summary.owner_username),
        role=summary.role,
        member_count=summary.member_count,
        clipboard_count=summary.clipboard_count,
        created_at=room.created_at.isoformat() if room.created_at else "",
        updated_at=room.updated_at.isoformat() if room.updated_at else "",
    )


def _detail_to_response(detail: RoomDetail) -> RoomDetailResponse:
    base = _room_to_response(detail)
    return RoomDetailResponse(
        **base.model_dump(),
        members=[
            RoomMemberResponse(
                user_id=m.user_id,
                username=m.username,
                role=m.role,
                joined_at=m.joined_at.isoformat() if m.joined_at else "",
            )
            for m in detail.members
        ],
    )


@router.get("", response_model=RoomListResponse)
def list_rooms(
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """List every room the current user belongs to."""
    summaries = room_service.list_rooms(identity, session)
    return RoomListResponse(rooms=[_room_to_response(s) for s in summaries])


@router.post("", response_model=RoomResponse)
def create_room(
    request: RoomCreateRequest,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    summary = room_service.create_room(identity, request.name, request.description, session)
    return _room_to_response(summary)


@router.post("/join", response_model=RoomJoinResponse)
def join_room(
    request: RoomJoinRequest,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Join a room by its code (case-insensitive)."""
    room, membership = room_service.join_room(identity, request.code, session)
    return RoomJoinResponse(room_id=room.id, room_name=room.name, role=membership.role)


@router.get("/{room_id}", response_model=RoomDetailResponse)
def get_room(
    room_id: str,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    return _detail_to_response(room_service.get_room(identity, room_id, session))


@router.delete("/{room_id}", response_model=MessageResponse)
def delete_room(
    room_id: str,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Delete a room. Owner only."""
    room_service.delete_room(identity, room_id, session)
    return MessageResponse(message="Room deleted successfully")


@router.put("/{room_id}", response_model=MessageResponse)
def room_action(
    room_id: str,
    request: RoomActionRequest,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Perform a membership action on a room. Only 'leave' is supported."""
    if request.action != "leave":
        raise ValidationError("Invalid action")
    room_service.leave_room(identity, room_id, session)
    return MessageResponse(message="Left room successfully")
