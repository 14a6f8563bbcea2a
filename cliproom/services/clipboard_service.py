"""Clipboard item business logic.

Text content and metadata are encrypted on the way in and decrypted on the
way out (``reveal_content`` / ``reveal_meta``); image and file items store a
public storage path in clear. Every operation is gated on room membership.
"""

import logging
from datetime import datetime, timezone
from typing import Any, BinaryIO

from sqlmodel import Session, col, select

from cliproom.config import settings
from cliproom.errors import NotFoundError, ValidationError
from cliproom.models.clipboard import FILE_ITEM_TYPES, ITEM_TYPES, ClipboardItem
from cliproom.models.user import User
from cliproom.services.access_service import require_membership
from cliproom.utils.encryption import decrypt, decrypt_object, encrypt, encrypt_object
from cliproom.utils.security import Identity
from cliproom.utils.storage import remove_stored_file, save_room_file

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("content", "title", "category")


# --- Read boundary ---

def reveal_content(item: ClipboardItem) -> str:
    return decrypt(item.content) if item.type == "text" else item.content


def reveal_meta(item: ClipboardItem) -> Any:
    return decrypt_object(item.meta) if item.meta else None


def seal_content(item_type: str, content: str) -> str:
    return encrypt(content) if item_type == "text" else content


def author_names(items: list[ClipboardItem], session: Session) -> dict[str, str]:
    """Resolve user_id -> username for a batch of items."""
    user_ids = list({i.user_id for i in items})
    if not user_ids:
        return {}
    users = session.exec(select(User).where(col(User.id).in_(user_ids))).all()
    return {u.id: u.username for u in users}


def _get_item_or_404(item_id: str | None, session: Session) -> ClipboardItem:
    if not item_id:
        raise ValidationError("Item ID is required")
    item = session.get(ClipboardItem, item_id)
    if not item:
        raise NotFoundError("Item not found")
    return item


# --- Operations ---

def list_items(identity: Identity, room_id: str | None, session: Session) -> list[ClipboardItem]:
    """All items in a room, newest first."""
    if not room_id:
        raise ValidationError("Room ID is required")
    require_membership(identity, room_id, session)
    return list(
        session.exec(
            select(ClipboardItem)
            .where(ClipboardItem.room_id == room_id)
            .order_by(col(ClipboardItem.created_at).desc())
        ).all()
    )


def create_item(
    identity: Identity,
    room_id: str | None,
    item_type: str | None,
    content: str | None,
    session: Session,
    title: str | None = None,
    category: str | None = None,
    meta: Any = None,
) -> ClipboardItem:
    if not room_id or not item_type or not content:
        raise ValidationError("Room ID, type, and content are required")
    if item_type not in ITEM_TYPES:
        raise ValidationError("Type must be 'text', 'image' or 'file'")
    require_membership(identity, room_id, session)

    item = ClipboardItem(
        room_id=room_id,
        user_id=identity.user_id,
        type=item_type,
        content=seal_content(item_type, content),
        title=title,
        category=category,
        meta=encrypt_object(meta) if meta else None,
    )
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def update_item(
    identity: Identity,
    item_id: str | None,
    changes: dict[str, Any],
    session: Session,
) -> ClipboardItem:
    """Apply a partial update. Only keys present in ``changes`` are touched."""
    item = _get_item_or_404(item_id, session)
    require_membership(identity, item.room_id, session)

    if changes.get("content") is not None:
        if item.type in FILE_ITEM_TYPES:
            raise ValidationError("Content of image and file items cannot be changed")
        item.content = seal_content(item.type, changes["content"])
    if "title" in changes:
        item.title = changes["title"]
    if "category" in changes:
        item.category = changes["category"]
    item.updated_at = datetime.now(timezone.utc)

    session.add(item)
    session.commit()
    session.refresh(item)
    return item


def delete_item(identity: Identity, item_id: str | None, session: Session) -> None:
    item = _get_item_or_404(item_id, session)
    require_membership(identity, item.room_id, session)

    stored_path = item.content if item.type in FILE_ITEM_TYPES else None
    room_id = item.room_id
    session.delete(item)
    session.commit()
    if stored_path:
        remove_stored_file(stored_path, room_id)


def upload_file(
    identity: Identity,
    room_id: str | None,
    item_type: str | None,
    filename: str,
    content_type: str,
    stream: BinaryIO | None,
    session: Session,
    size: int | None = None,
) -> ClipboardItem:
    """Store an uploaded image/file and create the clipboard item pointing at it.

    Membership and the declared ``size`` are checked before any bytes are
    read, and at most ``max_upload_bytes + 1`` bytes are ever pulled from
    ``stream``.
    """
    if stream is None:
        raise ValidationError("File is required")
    if not room_id:
        raise ValidationError("Room ID is required")
    if item_type not in FILE_ITEM_TYPES:
        raise ValidationError("Type must be 'image' or 'file'")
    require_membership(identity, room_id, session)

    limit = settings.max_upload_bytes
    if size is not None and size > limit:
        raise ValidationError(f"File too large (max {limit} bytes)")
    data = stream.read(limit + 1)
    if not data:
        raise ValidationError("File is required")
    if len(data) > limit:
        raise ValidationError(f"File too large (max {limit} bytes)")

    public_path = save_room_file(room_id, filename, data)
    meta = {
        "originalName": filename,
        "mimeType": content_type,
        "size": len(data),
    }
    item = ClipboardItem(
        room_id=room_id,
        user_id=identity.user_id,
        type=item_type,
        content=public_path,
        title=filename,
        meta=encrypt_object(meta),
    )
    session.add(item)
    session.commit()
    session.refresh(item)
    logger.info("Stored %d bytes for room %s at %s", len(data), room_id, public_path)
    return item
