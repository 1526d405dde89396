"""Password hashing, session JWTs and the role-based authorization guard."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

import bcrypt
import jwt

from complaintdesk.core.config import settings
from complaintdesk.core.errors import ForbiddenError, UnauthenticatedError

# Bcrypt cost (rounds); fixed, not tunable at runtime.
BCRYPT_ROUNDS = 12

PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"


# Allow-list shared by every protected route.
ANY_ROLE: frozenset[Role] = frozenset({Role.USER, Role.ADMIN})


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a valid session token."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | int, role: str) -> str:
    """Create a JWT session token with sub (user id), role, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": str(role),
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )


def verify_access_token(token: str) -> TokenClaims | None:
    """
    Return the claims of a valid token, or None.

    Malformed, expired, badly signed and semantically invalid tokens all
    give the same None result.
    """
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        return None
    try:
        return TokenClaims(user_id=int(payload["sub"]), role=Role(payload.get("role")))
    except (KeyError, TypeError, ValueError):
        return None


def authorize(token: str | None, allowed_roles: frozenset[Role]) -> TokenClaims:
    """
    Check a session token against an allow-list of roles.

    Raises UnauthenticatedError when the token is absent or invalid and
    ForbiddenError when the role is not allowed. No side effects.
    """
    if not token:
        raise UnauthenticatedError("Not authenticated")
    claims = verify_access_token(token)
    if claims is None:
        raise UnauthenticatedError("Invalid or expired token")
    if claims.role not in allowed_roles:
        raise ForbiddenError("Forbidden")
    return claims
