"""Room access checks shared by the session and API-key surfaces."""

from sqlmodel import Session

from cliproom.errors import AccessDeniedError, NotFoundError
from cliproom.models.room import Room, RoomMember
from cliproom.utils.security import Identity


def get_room_or_404(room_id: str, session: Session) -> Room:
    room = session.get(Room, room_id)
    if not room:
        raise NotFoundError("Room not found")
    return room


def get_membership(identity: Identity, room_id: str, session: Session) -> RoomMember | None:
    return session.get(RoomMember, (identity.user_id, room_id))


def require_membership(identity: Identity, room_id: str, session: Session) -> RoomMember:
    """Return the caller's membership row for a room or raise AccessDeniedError."""
    membership = get_membership(identity, room_id, session)
    if not membership:
        raise AccessDeniedError("Access denied to this room")
    return membership


def require_ownership(identity: Identity, room: Room) -> None:
    if room.owner_id != identity.user_id:
        raise AccessDeniedError("Only the room owner can delete this room")
