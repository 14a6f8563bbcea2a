"""Room request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from cliproom.schemas.common import ApiModel


class RoomCreateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class RoomJoinRequest(BaseModel):
    code: Optional[str] = None


class RoomActionRequest(BaseModel):
    action: Optional[str] = None  # 'leave'


class OwnerInfo(BaseModel):
    username: str


class RoomResponse(ApiModel):
    id: str
    name: str
    description: Optional[str]
    code: str
    owner_id: str = Field(alias="ownerId")
    owner: OwnerInfo
    role: str
    member_count: int = Field(alias="memberCount")
    clipboard_count: int = Field(alias="clipboardCount")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class RoomMemberResponse(ApiModel):
    user_id: str = Field(alias="userId")
    username: str
    role: str
    joined_at: str = Field(alias="joinedAt")


class RoomDetailResponse(RoomResponse):
    members: list[RoomMemberResponse]


class RoomListResponse(BaseModel):
    rooms: list[RoomResponse]


class RoomJoinResponse(ApiModel):
    message: str = "Joined room successfully"
    room_id: str = Field(alias="roomId")
    room_name: str = Field(alias="roomName")
    role: str
