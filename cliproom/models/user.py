"""User model."""

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: f"usr_{secrets.token_hex(8)}", primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str
    email: str = Field(default="")
    api_key: Optional[str] = Field(default=None, unique=True, index=True)  # 64 hex chars
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
