"""Account business logic: signup, login, API key management."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from cliproom.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from cliproom.models.user import User
from cliproom.utils.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    Identity,
    generate_api_key,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def identity_for(user: User) -> Identity:
    return Identity(user_id=user.id, username=user.username, email=user.email or "")


def signup(username: str | None, password: str | None, session: Session) -> User:
    """Create a user with a fresh API key. Raises on invalid or duplicate input."""
    if not username or not password:
        raise ValidationError("Username and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")

    existing = session.exec(select(User).where(User.username == username)).first()
    if existing:
        raise ConflictError("Username already exists")

    user = User(
        username=username,
        password_hash=hash_password(password),
        api_key=generate_api_key(),
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same name
        session.rollback()
        raise ConflictError("Username already exists")
    session.refresh(user)
    logger.info("User %s signed up", user.id)
    return user


def login(username: str | None, password: str | None, session: Session) -> User:
    if not username or not password:
        raise ValidationError("Username and password are required")

    user = session.exec(select(User).where(User.username == username)).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for username %r", username)
        raise AuthenticationError("Invalid username or password")
    return user


def get_api_key(identity: Identity, session: Session) -> str | None:
    user = session.get(User, identity.user_id)
    if not user:
        raise NotFoundError("User not found")
    return user.api_key


def regenerate_api_key(identity: Identity, session: Session) -> str:
    """Replace the caller's API key. The previous key stops working immediately."""
    user = session.get(User, identity.user_id)
    if not user:
        raise NotFoundError("User not found")
    user.api_key = generate_api_key()
    session.add(user)
    session.commit()
    logger.info("API key regenerated for user %s", user.id)
    return user.api_key


def validate_api_key(api_key: str | None, session: Session) -> Identity | None:
    """Resolve an API key to its owner's identity, or None if it matches nobody."""
    if not api_key:
        return None
    user = session.exec(select(User).where(User.api_key == api_key)).first()
    if not user:
        return None
    return identity_for(user)
