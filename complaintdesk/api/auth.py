"""Signup, login, logout and current-user endpoints (JWT in an HTTP-only cookie)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from complaintdesk.api.deps import AnyCaller
from complaintdesk.core.config import settings
from complaintdesk.core.database import get_db
from complaintdesk.core.errors import ForbiddenError
from complaintdesk.core.security import Role, create_access_token
from complaintdesk.models import User
from complaintdesk.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserProfile,
)
from complaintdesk.services.users import authenticate, get_user, register_user

logger = logging.getLogger(__name__)
router = APIRouter()


def _set_session_cookie(response: Response, user: User) -> None:
    token = create_access_token(sub=user.id, role=user.role)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        path="/",
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an account and start a session. 400 if the email is already registered."""
    role = body.role or Role.USER
    if role is Role.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
        raise ForbiddenError("Admin signup is disabled")
    user = register_user(db, body.name, body.email, body.password, role)
    _set_session_cookie(response, user)
    return AuthResponse(
        message="Signup successful",
        user=UserProfile.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Check email and password and start a session. 401 on bad credentials."""
    user = authenticate(db, body.email, body.password)
    _set_session_cookie(response, user)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return AuthResponse(
        message="Login successful",
        user=UserProfile.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. The token itself stays valid until it expires."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="strict",
    )
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserProfile)
def me(
    caller: AnyCaller,
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Return the profile behind the current session. 404 if the user no longer exists."""
    return UserProfile.model_validate(get_user(db, caller.user_id))
