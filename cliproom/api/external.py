"""External API endpoints, authenticated with a bearer API key.

Same operations and access checks as the session-based routes, with
responses reshaped to the allowlisted fields in ``schemas.external``.
"""

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from cliproom.api.deps import require_api_key_identity
from cliproom.database import get_session
from cliproom.errors import ValidationError
from cliproom.models.clipboard import ClipboardItem
from cliproom.schemas.clipboard import ClipboardUpdateRequest
from cliproom.schemas.common import MessageResponse
from cliproom.schemas.external import (
    ExternalClipboardCreateRequest,
    ExternalClipboardItem,
    ExternalClipboardListedItem,
    ExternalClipboardListResponse,
    ExternalJoinResponse,
    ExternalRoomListResponse,
    ExternalRoomResponse,
)
from cliproom.schemas.room import RoomCreateRequest, RoomJoinRequest
from cliproom.services import clipboard_service, room_service
from cliproom.services.clipboard_service import EDITABLE_FIELDS, reveal_content
from cliproom.services.room_service import RoomSummary
from cliproom.utils.security import Identity

router = APIRouter(prefix="/external", tags=["external"])


def _room_to_external(summary: RoomSummary) -> ExternalRoomResponse:
    room = summary.room
    return ExternalRoomResponse(
        id=room.id,
        name=room.name,
        description=room.description,
        code=room.code,
        role=summary.role,
        member_count=summary.member_count,
        clipboard_count=summary.clipboard_count,
        created_at=room.created_at.isoformat() if room.created_at else "",
        updated_at=room.updated_at.isoformat() if room.updated_at else "",
    )


def _item_to_external(item: ClipboardItem) -> ExternalClipboardItem:
    return ExternalClipboardItem(
        id=item.id,
        type=item.type,
        content=reveal_content(item),
        title=item.title,
        category=item.category,
        created_at=item.created_at.isoformat() if item.created_at else "",
        updated_at=item.updated_at.isoformat() if item.updated_at else "",
    )


def _item_to_listed(item: ClipboardItem, created_by: str | None) -> ExternalClipboardListedItem:
    return ExternalClipboardListedItem(
        **_item_to_external(item).model_dump(),
        created_by=created_by,
    )


# --- Rooms ---

@router.get("/rooms", response_model=ExternalRoomListResponse)
def list_rooms(
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    summaries = room_service.list_rooms(identity, session)
    return ExternalRoomListResponse(rooms=[_room_to_external(s) for s in summaries])


@router.post("/rooms", response_model=ExternalRoomResponse)
def create_room(
    request: RoomCreateRequest,
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    summary = room_service.create_room(identity, request.name, request.description, session)
    return _room_to_external(summary)


@router.post("/rooms/join", response_model=ExternalJoinResponse)
def join_room(
    request: RoomJoinRequest,
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    room, _ = room_service.join_room(identity, request.code, session)
    return ExternalJoinResponse(room_id=room.id, room_name=room.name)


@router.delete("/rooms", response_model=MessageResponse)
def delete_room(
    room_id: str | None = Query(default=None, alias="id"),
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    """Delete a room. Owner only."""
    if not room_id:
        raise ValidationError("Room ID is required")
    room_service.delete_room(identity, room_id, session)
    return MessageResponse(message="Room deleted successfully")


# --- Clipboard ---

@router.get("/clipboard", response_model=ExternalClipboardListResponse)
def list_items(
    room_id: str | None = Query(default=None, alias="roomId"),
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    items = clipboard_service.list_items(identity, room_id, session)
    names = clipboard_service.author_names(items, session)
    return ExternalClipboardListResponse(
        items=[_item_to_listed(i, names.get(i.user_id)) for i in items]
    )


@router.post("/clipboard", response_model=ExternalClipboardItem)
def create_item(
    request: ExternalClipboardCreateRequest,
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    item = clipboard_service.create_item(
        identity,
        request.room_id,
        request.type,
        request.content,
        session,
        title=request.title,
        category=request.category,
    )
    return _item_to_external(item)


@router.put("/clipboard", response_model=ExternalClipboardListedItem)
def update_item(
    request: ClipboardUpdateRequest,
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    changes = {
        name: getattr(request, name)
        for name in EDITABLE_FIELDS
        if name in request.model_fields_set
    }
    item = clipboard_service.update_item(identity, request.id, changes, session)
    names = clipboard_service.author_names([item], session)
    return _item_to_listed(item, names.get(item.user_id))


@router.delete("/clipboard", response_model=MessageResponse)
def delete_item(
    item_id: str | None = Query(default=None, alias="id"),
    identity: Identity = Depends(require_api_key_identity),
    session: Session = Depends(get_session),
):
    clipboard_service.delete_item(identity, item_id, session)
    return MessageResponse(message="Item deleted successfully")
