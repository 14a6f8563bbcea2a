"""ClipRoom Database Models."""

from cliproom.models.user import User
from cliproom.models.room import Room, RoomMember
from cliproom.models.clipboard import ClipboardItem

__all__ = [
    "User",
    "Room",
    "RoomMember",
    "ClipboardItem",
]
