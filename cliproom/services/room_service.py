"""Room business logic: creation with unique join codes, join/leave/delete.

Join codes are six characters from an alphabet without the easily confused
glyphs I, O, 0 and 1. Creation re-rolls the code until it is free, both when
the pre-check finds a clash and when the unique index rejects the insert
because a concurrent request took the same code first.
"""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from cliproom.config import settings
from cliproom.errors import (
    AccessDeniedError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from cliproom.models.clipboard import ClipboardItem
from cliproom.models.room import ROLE_MEMBER, ROLE_OWNER, Room, RoomMember
from cliproom.models.user import User
from cliproom.services.access_service import (
    get_membership,
    get_room_or_404,
    require_membership,
    require_ownership,
)
from cliproom.utils.security import Identity
from cliproom.utils.storage import remove_room_files

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


@dataclass
class RoomSummary:
    room: Room
    role: str
    owner_username: str
    member_count: int
    clipboard_count: int


@dataclass
class MemberInfo:
    user_id: str
    username: str
    role: str
    joined_at: datetime


@dataclass
class RoomDetail(RoomSummary):
    members: list[MemberInfo] = field(default_factory=list)


def generate_room_code(length: int | None = None) -> str:
    length = length or settings.room_code_length
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def normalize_room_code(code: str) -> str:
    return code.strip().upper()


def _count_members(room_id: str, session: Session) -> int:
    return session.exec(
        select(func.count()).select_from(RoomMember).where(RoomMember.room_id == room_id)
    ).one()


def _count_items(room_id: str, session: Session) -> int:
    return session.exec(
        select(func.count()).select_from(ClipboardItem).where(ClipboardItem.room_id == room_id)
    ).one()


def _owner_username(room: Room, session: Session) -> str:
    owner = session.get(User, room.owner_id)
    return owner.username if owner else ""


def _summarize(room: Room, role: str, session: Session) -> RoomSummary:
    return RoomSummary(
        room=room,
        role=role,
        owner_username=_owner_username(room, session),
        member_count=_count_members(room.id, session),
        clipboard_count=_count_items(room.id, session),
    )


def list_rooms(identity: Identity, session: Session) -> list[RoomSummary]:
    """All rooms the caller belongs to, oldest membership first."""
    rows = session.exec(
        select(RoomMember, Room)
        .where(RoomMember.room_id == Room.id, RoomMember.user_id == identity.user_id)
        .order_by(RoomMember.joined_at)
    ).all()
    return [_summarize(room, membership.role, session) for membership, room in rows]


def get_room(identity: Identity, room_id: str, session: Session) -> RoomDetail:
    room = get_room_or_404(room_id, session)
    membership = require_membership(identity, room_id, session)

    rows = session.exec(
        select(RoomMember, User)
        .where(RoomMember.user_id == User.id, RoomMember.room_id == room_id)
        .order_by(RoomMember.joined_at)
    ).all()
    members = [
        MemberInfo(user_id=u.id, username=u.username, role=m.role, joined_at=m.joined_at)
        for m, u in rows
    ]
    summary = _summarize(room, membership.role, session)
    return RoomDetail(**vars(summary), members=members)


def create_room(
    identity: Identity,
    name: str | None,
    description: str | None,
    session: Session,
) -> RoomSummary:
    """Create a room owned by the caller, together with the owner's membership."""
    if not name or not name.strip():
        raise ValidationError("Room name is required")

    for attempt in range(1, settings.room_code_max_attempts + 1):
        code = generate_room_code()
        taken = session.exec(select(Room).where(Room.code == code)).first()
        if taken:
            logger.warning("Room code collision on attempt %d, re-rolling", attempt)
            continue

        room = Room(
            name=name.strip(),
            description=description,
            code=code,
            owner_id=identity.user_id,
        )
        session.add(room)
        session.add(RoomMember(user_id=identity.user_id, room_id=room.id, role=ROLE_OWNER))
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.warning("Room code taken concurrently on attempt %d, re-rolling", attempt)
            continue

        session.refresh(room)
        logger.info("Room %s created by %s", room.id, identity.user_id)
        return RoomSummary(
            room=room,
            role=ROLE_OWNER,
            owner_username=identity.username,
            member_count=1,
            clipboard_count=0,
        )

    logger.error("Gave up allocating a room code after %d attempts", settings.room_code_max_attempts)
    raise InternalError("Could not allocate a unique room code")


def join_room(identity: Identity, code: str | None, session: Session) -> tuple[Room, RoomMember]:
    if not code or not code.strip():
        raise ValidationError("Room code is required")

    room = session.exec(select(Room).where(Room.code == normalize_room_code(code))).first()
    if not room:
        raise NotFoundError("Invalid room code")

    if get_membership(identity, room.id, session):
        raise ConflictError("You are already a member of this room")

    membership = RoomMember(user_id=identity.user_id, room_id=room.id, role=ROLE_MEMBER)
    session.add(membership)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ConflictError("You are already a member of this room")
    session.refresh(membership)
    session.refresh(room)
    logger.info("User %s joined room %s", identity.user_id, room.id)
    return room, membership


def leave_room(identity: Identity, room_id: str, session: Session) -> None:
    """Drop the caller's membership. Owners cannot leave their own room."""
    room = get_room_or_404(room_id, session)
    if room.owner_id == identity.user_id:
        raise ValidationError("Room owner cannot leave. Delete the room instead.")

    membership = get_membership(identity, room_id, session)
    if not membership:
        raise AccessDeniedError("You are not a member of this room")

    session.delete(membership)
    session.commit()
    logger.info("User %s left room %s", identity.user_id, room_id)


def delete_room(identity: Identity, room_id: str, session: Session) -> None:
    """Delete a room. Members and clipboard items go with it (ON DELETE CASCADE)."""
    room = get_room_or_404(room_id, session)
    require_ownership(identity, room)

    session.delete(room)
    session.commit()
    remove_room_files(room_id)
    logger.info("Room %s deleted by %s", room_id, identity.user_id)
