"""Clipboard item API endpoints (session auth)."""

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from cliproom.api.deps import require_session_identity
from cliproom.database import get_session
from cliproom.models.clipboard import ClipboardItem
from cliproom.schemas.clipboard import (
    AuthorInfo,
    ClipboardCreateRequest,
    ClipboardItemResponse,
    ClipboardListResponse,
    ClipboardUpdateRequest,
)
from cliproom.schemas.common import MessageResponse
from cliproom.services import clipboard_service
from cliproom.services.clipboard_service import EDITABLE_FIELDS, reveal_content, reveal_meta
from cliproom.utils.security import Identity

router = APIRouter(prefix="/clipboard", tags=["clipboard"])


def item_to_response(item: ClipboardItem, username: str) -> ClipboardItemResponse:
    return ClipboardItemResponse(
        id=item.id,
        room_id=item.room_id,
        user_id=item.user_id,
        type=item.type,
        content=reveal_content(item),
        title=item.title,
        category=item.category,
        meta=reveal_meta(item),
        created_at=item.created_at.isoformat() if item.created_at else "",
        updated_at=item.updated_at.isoformat() if item.updated_at else "",
        user=AuthorInfo(username=username),
    )


@router.get("", response_model=ClipboardListResponse)
def list_items(
    room_id: str | None = Query(default=None, alias="roomId"),
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """List a room's clipboard, newest first, with content decrypted."""
    items = clipboard_service.list_items(identity, room_id, session)
    names = clipboard_service.author_names(items, session)
    return ClipboardListResponse(
        items=[item_to_response(i, names.get(i.user_id, "")) for i in items]
    )


@router.post("", response_model=ClipboardItemResponse)
def create_item(
    request: ClipboardCreateRequest,
    identity: Identity = Depends(require_session_identity),
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
        meta=request.meta,
    )
    return item_to_response(item, identity.username)


@router.put("", response_model=ClipboardItemResponse)
def update_item(
    request: ClipboardUpdateRequest,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Edit an item's content, title or category. Omitted fields are left alone."""
    changes = {
        name: getattr(request, name)
        for name in EDITABLE_FIELDS
        if name in request.model_fields_set
    }
    item = clipboard_service.update_item(identity, request.id, changes, session)
    names = clipboard_service.author_names([item], session)
    return item_to_response(item, names.get(item.user_id, ""))


@router.delete("", response_model=MessageResponse)
def delete_item(
    item_id: str | None = Query(default=None, alias="id"),
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    clipboard_service.delete_item(identity, item_id, session)
    return MessageResponse(message="Item deleted successfully")
