"""At-rest encryption for clipboard content and metadata.

Rows written before encryption was introduced hold plaintext, and image/file
items keep their storage path in clear. Every read therefore goes through
``decrypt``/``decrypt_object``, which hand back anything that is not a valid
token for the configured key unchanged instead of failing.
"""

import base64
import hashlib
import json
from functools import lru_cache
from typing import Any

from cryptography.fernet import Fernet, InvalidToken

from cliproom.config import settings


@lru_cache(maxsize=4)
def _cipher_for(key: str) -> Fernet:
    # Fernet wants 32 url-safe base64 bytes; derive them from the configured passphrase
    digest = hashlib.sha256(key.encode()).digest()
    return Fernet(base64.urlsafe_b64encode(digest))


def _cipher() -> Fernet:
    return _cipher_for(settings.encryption_key)


def _try_decrypt(ciphertext: str) -> str | None:
    """Decrypt a token, or None if it is not one of ours."""
    if not ciphertext:
        return None
    try:
        return _cipher().decrypt(ciphertext.encode()).decode()
    except (InvalidToken, ValueError):
        return None


def encrypt(text: str) -> str:
    return _cipher().encrypt(text.encode()).decode()


def decrypt(ciphertext: str) -> str:
    """Decrypt content, returning the input unchanged if it is not encrypted."""
    plaintext = _try_decrypt(ciphertext)
    return ciphertext if plaintext is None else plaintext


def encrypt_object(obj: Any) -> str:
    return encrypt(json.dumps(obj))


def decrypt_object(ciphertext: str | None) -> Any:
    """Decrypt a JSON blob. Plain (legacy) JSON is accepted as-is.

    Returns None for empty input or anything that does not parse.
    """
    if not ciphertext:
        return None
    plaintext = _try_decrypt(ciphertext)
    try:
        if plaintext is not None:
            return json.loads(plaintext)
        return json.loads(ciphertext)
    except ValueError:
        return None
