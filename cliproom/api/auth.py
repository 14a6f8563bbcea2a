"""Authentication & API key endpoints."""

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from cliproom.api.deps import clear_session_cookie, require_session_identity, set_session_cookie
from cliproom.database import get_session
from cliproom.schemas.auth import (
    ApiKeyRegeneratedResponse,
    ApiKeyResponse,
    CredentialsRequest,
    LoginResponse,
    MeResponse,
    SignupResponse,
    UserInfo,
)
from cliproom.schemas.common import MessageResponse
from cliproom.services import auth_service
from cliproom.services.auth_service import identity_for
from cliproom.utils.security import Identity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse)
def signup(
    request: CredentialsRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    """Create an account. Starts a session and returns the new API key."""
    user = auth_service.signup(request.username, request.password, session)
    set_session_cookie(response, identity_for(user))
    return SignupResponse(
        user=UserInfo(id=user.id, username=user.username),
        api_key=user.api_key,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    request: CredentialsRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    user = auth_service.login(request.username, request.password, session)
    set_session_cookie(response, identity_for(user))
    return LoginResponse(user=UserInfo(id=user.id, username=user.username))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Clear the session cookie. Tokens are stateless, so nothing is revoked server-side."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
def me(identity: Identity = Depends(require_session_identity)):
    return MeResponse(user=UserInfo(id=identity.user_id, username=identity.username))


@router.get("/api-key", response_model=ApiKeyResponse)
def get_api_key(
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    return ApiKeyResponse(api_key=auth_service.get_api_key(identity, session))


@router.post("/api-key", response_model=ApiKeyRegeneratedResponse)
def regenerate_api_key(
    identity: Identity = Depends(require_session_identity),
    session: Session = Depends(get_session),
):
    """Issue a new API key, replacing the old one."""
    new_key = auth_service.regenerate_api_key(identity, session)
    return ApiKeyRegeneratedResponse(api_key=new_key)
