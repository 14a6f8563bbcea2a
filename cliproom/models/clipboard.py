"""Clipboard item model."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

ITEM_TYPES = ("text", "image", "file")
FILE_ITEM_TYPES = ("image", "file")


class ClipboardItem(SQLModel, table=True):
    __tablename__ = "clipboard_items"

    id: str = Field(default_factory=lambda: f"clip_{secrets.token_hex(8)}", primary_key=True)
    room_id: str = Field(foreign_key="rooms.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", index=True)
    type: str  # 'text' | 'image' | 'file'
    content: str  # ciphertext for text, /uploads/<room>/<file> for image/file
    title: Optional[str] = None
    category: Optional[str] = None
    meta: Optional[str] = None  # encrypted JSON: originalName, mimeType, size
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
