"""Storage utilities: per-room upload paths on local disk."""

import logging
import shutil
import uuid
from pathlib import Path

from cliproom.config import settings
from cliproom.errors import NotFoundError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


def get_room_storage_path(room_id: str) -> Path:
    """Directory holding a room's uploads: uploads/<room_id>/"""
    path = _safe_child(settings.upload_dir, room_id)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _safe_child(base: Path, name: str) -> Path:
    # Only a single plain path component is allowed
    if not name or Path(name).name != name or name in (".", ".."):
        raise NotFoundError("File not found")
    return base / name


def save_room_file(room_id: str, filename: str, data: bytes) -> str:
    """Write uploaded bytes under a fresh name and return the public path.

    The stored name is a random UUID keeping the original extension.
    """
    ext = Path(filename).suffix.lower()
    stored_name = f"{uuid.uuid4()}{ext}"
    file_path = get_room_storage_path(room_id) / stored_name
    file_path.write_bytes(data)
    return f"{PUBLIC_PREFIX}/{room_id}/{stored_name}"


def resolve_room_file(room_id: str, filename: str) -> Path:
    """Map a (room, filename) pair back to the file on disk."""
    room_dir = _safe_child(settings.upload_dir, room_id)
    file_path = _safe_child(room_dir, filename)
    if not file_path.is_file():
        raise NotFoundError("File not found")
    return file_path


def remove_stored_file(public_path: str, room_id: str) -> None:
    """Delete the file behind a /uploads/<room>/<file> path, if present.

    Paths pointing into another room's directory are left alone.
    """
    parts = public_path.strip("/").split("/")
    if len(parts) != 3 or f"/{parts[0]}" != PUBLIC_PREFIX:
        return
    if parts[1] != room_id:
        logger.warning("Not removing %s: it does not belong to room %s", public_path, room_id)
        return
    try:
        resolve_room_file(parts[1], parts[2]).unlink()
    except NotFoundError:
        logger.warning("Stored file already missing: %s", public_path)


def remove_room_files(room_id: str) -> None:
    room_dir = settings.upload_dir / room_id
    if room_dir.is_dir():
        shutil.rmtree(room_dir, ignore_errors=True)
