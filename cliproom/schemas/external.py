"""External (API-key) surface schemas.

These are explicit field allowlists: nothing beyond what is declared here
leaves through /api/external.
"""

from typing import Optional

from pydantic import BaseModel, Field

from cliproom.schemas.common import ApiModel


class ExternalRoomResponse(ApiModel):
    id: str
    name: str
    description: Optional[str]
    code: str
    role: str
    member_count: int = Field(alias="memberCount")
    clipboard_count: int = Field(alias="clipboardCount")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class ExternalRoomListResponse(BaseModel):
    rooms: list[ExternalRoomResponse]


class ExternalJoinResponse(ApiModel):
    message: str = "Joined room successfully"
    room_id: str = Field(alias="roomId")
    room_name: str = Field(alias="roomName")


class ExternalClipboardCreateRequest(ApiModel):
    room_id: Optional[str] = Field(default=None, alias="roomId")
    type: Optional[str] = None
    content: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None


class ExternalClipboardItem(ApiModel):
    id: str
    type: str
    content: str
    title: Optional[str]
    category: Optional[str]
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class ExternalClipboardListedItem(ExternalClipboardItem):
    created_by: Optional[str] = Field(default=None, alias="createdBy")


class ExternalClipboardListResponse(BaseModel):
    items: list[ExternalClipboardListedItem]
