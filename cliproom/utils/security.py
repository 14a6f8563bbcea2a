"""Security utilities: password hashing, session tokens, API keys."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from cliproom.config import settings
from cliproom.errors import InternalError

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Identity:
    """The caller a request acts on behalf of, however it authenticated."""

    user_id: str
    username: str
    email: str = ""


# --- Password Hashing ---

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    Returns False on mismatch. Raises InternalError if the stored hash
    itself is malformed.
    """
    password_bytes = password.encode()
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password_bytes, hashed.encode())
    except ValueError as e:
        raise InternalError("Malformed password hash") from e


# --- Session Tokens ---

def create_session_token(identity: Identity) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": identity.user_id,
        "username": identity.username,
        "email": identity.email,
        "iat": now,
        "exp": now + timedelta(days=settings.session_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str) -> Identity | None:
    """Decode a session token. Returns None for any invalid, expired or tampered token."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError:
        return None

    user_id = payload.get("userId")
    username = payload.get("username")
    if not isinstance(user_id, str) or not isinstance(username, str):
        return None
    return Identity(user_id=user_id, username=username, email=payload.get("email") or "")


# --- API Keys ---

def generate_api_key() -> str:
    """Generate a new API key: 32 random bytes, hex-encoded."""
    return secrets.token_hex(settings.api_key_bytes)
