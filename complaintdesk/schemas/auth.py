"""Request/response schemas for auth endpoints."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from complaintdesk.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, Role

# Loose shape check only; deliverability is not verified.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

DisplayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
EmailAddress = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=255, pattern=EMAIL_PATTERN)
]


class SignupRequest(BaseModel):
    """New account details. role defaults to 'user'."""

    name: DisplayName = Field(..., description="Display name")
    email: EmailAddress = Field(..., description="Email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: Role | None = Field(default=None, description="Requested role (user or admin)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class UserProfile(BaseModel):
    """Public view of a user (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class AuthResponse(BaseModel):
    """Returned by signup and login; the session token travels in the cookie only."""

    success: bool = True
    message: str
    user: UserProfile


class MessageResponse(BaseModel):
    """Generic acknowledgement body."""

    success: bool = True
    message: str
