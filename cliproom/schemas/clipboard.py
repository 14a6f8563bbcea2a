"""Clipboard item request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from cliproom.schemas.common import ApiModel


class ClipboardCreateRequest(ApiModel):
    room_id: Optional[str] = Field(default=None, alias="roomId")
    type: Optional[str] = None  # 'text' | 'image' | 'file'
    content: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    meta: Optional[Any] = None


class ClipboardUpdateRequest(BaseModel):
    id: Optional[str] = None
    content: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None


class AuthorInfo(BaseModel):
    username: str


class ClipboardItemResponse(ApiModel):
    id: str
    room_id: str = Field(alias="roomId")
    user_id: str = Field(alias="userId")
    type: str
    content: str
    title: Optional[str]
    category: Optional[str]
    meta: Optional[Any] = None
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    user: AuthorInfo


class ClipboardListResponse(BaseModel):
    items: list[ClipboardItemResponse]
