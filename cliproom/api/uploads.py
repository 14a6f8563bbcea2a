"""File upload and download endpoints (session auth)."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse
from sqlmodel import Session

from cliproom.api.clipboard import item_to_response
from cliproom.api.deps import require_session_identity
from cliproom.database import get_session
from cliproom.schemas.clipboard import ClipboardItemResponse
from cliproom.services import clipboard_service
from cliproom.services.access_service import require_membership
from cliproom.utils.security import Identity
from cliproom.utils.storage import resolve_room_file

router = APIRouter(tags=["uploads"])

# Mounted at the site root: stored items reference /uploads/<room>/<file>
files_router = APIRouter(tags=["uploads"])


@router.post("/upload", response_model=ClipboardItemResponse)
def upload(
    file: UploadFile | None = File(default=None),
    room_id: str | None = Form(default=None, alias="roomId"),
    item_type: str | None = Form(default=None, alias="type"),
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Upload an image or file into a room's clipboard."""
    item = clipboard_service.upload_file(
        identity,
        room_id,
        item_type,
        filename=(file.filename if file else None) or "file",
        content_type=(file.content_type if file else None) or "application/octet-stream",
        stream=file.file if file else None,
        session=session,
        size=file.size if file else None,
    )
    return item_to_response(item, identity.username)


@files_router.get("/uploads/{room_id}/{filename}")
def download(
    room_id: str,
    filename: str,
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Serve a stored upload to members of its room."""
    require_membership(identity, room_id, session)
    file_path = resolve_room_file(room_id, filename)
    return FileResponse(path=str(file_path), filename=file_path.name)
