"""Room and membership models."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

ROLE_OWNER = "owner"
ROLE_MEMBER = "member"


class Room(SQLModel, table=True):
    __tablename__ = "rooms"

    id: str = Field(default_factory=lambda: f"room_{secrets.token_hex(8)}", primary_key=True)
    name: str
    description: Optional[str] = None
    code: str = Field(unique=True, index=True)  # 6-char join code
    owner_id: str = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RoomMember(SQLModel, table=True):
    __tablename__ = "room_members"

    user_id: str = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    room_id: str = Field(foreign_key="rooms.id", primary_key=True, index=True, ondelete="CASCADE")
    role: str = Field(default=ROLE_MEMBER)  # 'owner' | 'member'
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
