"""File uploads: storage sink, metadata and member-only downloads."""

import io

import pytest

from cliproom.config import settings
from cliproom.errors import ValidationError
from cliproom.services import clipboard_service
from cliproom.utils.security import Identity


def _upload(user, room_id, name="notes.txt", data=b"hello file", kind="file", mime="text/plain"):
    return user.client.post(
        "/api/upload",
        data={"roomId": room_id, "type": kind},
        files={"file": (name, data, mime)},
    )


def test_upload_creates_file_item(room_with_members):
    owner, member, _, room = room_with_members
    r = _upload(owner, room["id"])
    assert r.status_code == 200, r.text
    item = r.json()
    assert item["type"] == "file"
    assert item["title"] == "notes.txt"
    assert item["content"].startswith(f"/uploads/{room['id']}/")
    assert item["content"].endswith(".txt")
    assert item["meta"] == {"originalName": "notes.txt", "mimeType": "text/plain", "size": 10}

    listed = member.client.get("/api/clipboard", params={"roomId": room["id"]}).json()["items"]
    assert listed[0]["content"] == item["content"]
    assert listed[0]["meta"]["size"] == 10


def test_uploaded_file_is_served_to_members_only(room_with_members):
    owner, member, outsider, room = room_with_members
    item = _upload(owner, room["id"], name="pic.png", data=b"\x89PNG fake", kind="image", mime="image/png").json()

    r = member.client.get(item["content"])
    assert r.status_code == 200
    assert r.content == b"\x89PNG fake"

    assert outsider.client.get(item["content"]).status_code == 403


def test_upload_validation(room_with_members):
    owner, _, _, room = room_with_members
    r = _upload(owner, room["id"], kind="text")
    assert r.status_code == 400
    assert r.json() == {"error": "Type must be 'image' or 'file'"}

    r = _upload(owner, room["id"], data=b"")
    assert r.status_code == 400

    r = owner.client.post("/api/upload", data={"type": "file"}, files={"file": ("a.txt", b"abc", "text/plain")})
    assert r.status_code == 400
    assert r.json() == {"error": "Room ID is required"}


def test_upload_rejects_oversized_files(room_with_members, monkeypatch):
    owner, _, _, room = room_with_members
    monkeypatch.setattr(settings, "max_upload_bytes", 4)
    r = _upload(owner, room["id"], data=b"12345")
    assert r.status_code == 400


def test_outsider_cannot_upload(room_with_members):
    _, _, outsider, room = room_with_members
    assert _upload(outsider, room["id"]).status_code == 403


def test_deleting_item_removes_file(room_with_members):
    owner, _, _, room = room_with_members
    item = _upload(owner, room["id"]).json()
    stored = settings.upload_dir / room["id"] / item["content"].rsplit("/", 1)[1]
    assert stored.is_file()

    owner.client.delete("/api/clipboard", params={"id": item["id"]})
    assert not stored.exists()
    assert owner.client.get(item["content"]).status_code == 404


def test_deleting_room_removes_its_uploads(room_with_members):
    owner, _, _, room = room_with_members
    _upload(owner, room["id"])
    assert (settings.upload_dir / room["id"]).is_dir()

    owner.client.delete(f"/api/rooms/{room['id']}")
    assert not (settings.upload_dir / room["id"]).exists()


def test_download_rejects_path_tricks(room_with_members):
    owner, _, _, room = room_with_members
    r = owner.client.get(f"/uploads/{room['id']}/..%2F..%2Ftest.db")
    assert r.status_code == 404


def test_deleting_item_pointing_into_another_room_keeps_that_file(room_with_members):
    owner, _, outsider, room = room_with_members
    item = _upload(owner, room["id"], name="secret.txt").json()
    stored = settings.upload_dir / room["id"] / item["content"].rsplit("/", 1)[1]

    other_room = outsider.client.post("/api/rooms", json={"name": "Elsewhere"}).json()
    pointer = outsider.client.post(
        "/api/clipboard",
        json={"roomId": other_room["id"], "type": "file", "content": item["content"]},
    ).json()
    r = outsider.client.delete("/api/clipboard", params={"id": pointer["id"]})
    assert r.status_code == 200

    assert stored.is_file()
    assert owner.client.get(item["content"]).status_code == 200


def test_file_item_content_cannot_be_rewritten(room_with_members):
    owner, member, _, room = room_with_members
    item = _upload(owner, room["id"]).json()

    r = member.client.put("/api/clipboard", json={"id": item["id"], "content": "/uploads/other/x.txt"})
    assert r.status_code == 400
    assert r.json() == {"error": "Content of image and file items cannot be changed"}

    r = member.client.put("/api/clipboard", json={"id": item["id"], "title": "renamed.txt"})
    assert r.status_code == 200
    assert r.json()["content"] == item["content"]
    assert r.json()["title"] == "renamed.txt"


def test_upload_checks_membership_before_reading(room_with_members, monkeypatch):
    _, _, outsider, room = room_with_members
    monkeypatch.setattr(settings, "max_upload_bytes", 4)
    r = _upload(outsider, room["id"], data=b"far too large")
    assert r.status_code == 403
    assert not (settings.upload_dir / room["id"]).exists()


def test_upload_reads_no_more_than_the_limit(signup, db, monkeypatch):
    user = signup()
    room = user.client.post("/api/rooms", json={"name": "Bounded"}).json()
    monkeypatch.setattr(settings, "max_upload_bytes", 4)

    class CountingStream(io.BytesIO):
        def __init__(self, data):
            super().__init__(data)
            self.requested = []

        def read(self, size=-1):
            self.requested.append(size)
            return super().read(size)

    stream = CountingStream(b"0123456789")
    with pytest.raises(ValidationError):
        clipboard_service.upload_file(
            Identity(user_id=user.user_id, username=user.username),
            room["id"],
            "file",
            filename="big.bin",
            content_type="application/octet-stream",
            stream=stream,
            session=db,
        )
    assert stream.requested == [5]
