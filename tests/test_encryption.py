"""Content cipher: round trips and passthrough of unencrypted data."""

import json

import pytest

from cliproom.config import settings
from cliproom.utils.encryption import decrypt, decrypt_object, encrypt, encrypt_object

SAMPLES = [
    "hello",
    "",
    "{not really json",
    "[1, 2, 3]",
    '{"looks": "like json"}',
    "멀티바이트 텍스트 🎉",
    "line one\nline two\ttabbed",
    "x" * 10_000,
]


@pytest.mark.parametrize("text", SAMPLES)
def test_round_trip(text):
    assert decrypt(encrypt(text)) == text


def test_ciphertext_hides_plaintext():
    token = encrypt("top secret note")
    assert "top secret" not in token
    assert encrypt("top secret note") != token


@pytest.mark.parametrize(
    "plaintext",
    ["hello", "/uploads/room_1/abc.png", "{broken", "", "gAAAAAnot-a-token"],
)
def test_decrypt_passes_through_plaintext(plaintext):
    assert decrypt(plaintext) == plaintext


def test_token_from_another_key_passes_through(monkeypatch):
    token = encrypt("secret")
    monkeypatch.setattr(settings, "encryption_key", "a-completely-different-key")
    assert decrypt(token) == token


@pytest.mark.parametrize(
    "obj",
    [
        {"originalName": "report.pdf", "mimeType": "application/pdf", "size": 1234},
        {"nested": {"list": [1, 2, {"deep": True}]}, "none": None},
        [1, "two", 3.5],
        {},
        "just a string",
        42,
    ],
)
def test_object_round_trip(obj):
    assert decrypt_object(encrypt_object(obj)) == obj


def test_legacy_plain_json_metadata():
    meta = {"originalName": "a.txt", "mimeType": "text/plain", "size": 3}
    assert decrypt_object(json.dumps(meta)) == meta
    assert decrypt_object(json.dumps([1, 2])) == [1, 2]


@pytest.mark.parametrize("value", [None, "", "not json at all", "{broken"])
def test_unparseable_metadata_is_none(value):
    assert decrypt_object(value) is None


def test_encrypted_non_json_is_none():
    assert decrypt_object(encrypt("plain words")) is None
