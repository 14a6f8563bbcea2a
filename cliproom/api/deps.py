"""Common API dependencies: identity resolution for both entry surfaces.

Browser requests carry a signed session token in the ``session`` cookie;
external clients send ``Authorization: Bearer <api-key>``. Both resolve to
the same ``Identity`` so the room access checks downstream do not care which
surface a request came through.
"""

from fastapi import Depends, Response
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from cliproom.config import settings
from cliproom.database import get_session
from cliproom.errors import AuthenticationError
from cliproom.services.auth_service import validate_api_key
from cliproom.utils.security import Identity, create_session_token, verify_session_token

session_cookie_scheme = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_session_identity(token: str | None = Depends(session_cookie_scheme)) -> Identity | None:
    """Identity from the session cookie, or None for anonymous/bad sessions."""
    return verify_session_token(token) if token else None


def require_session_identity(
    identity: Identity | None = Depends(get_session_identity),
) -> Identity:
    if identity is None:
        raise AuthenticationError("Not authenticated")
    return identity


def require_api_key_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Identity:
    """Identity from a bearer API key."""
    identity = validate_api_key(credentials.credentials, session) if credentials else None
    if identity is None:
        raise AuthenticationError("Invalid or missing API key")
    return identity


# --- Cookie helpers ---

def set_session_cookie(response: Response, identity: Identity) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(identity),
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
