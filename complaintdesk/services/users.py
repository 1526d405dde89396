"""User accounts: signup, credential checks and profile lookup."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from complaintdesk.core.errors import ConflictError, NotFoundError, UnauthenticatedError
from complaintdesk.core.security import Role, hash_password, verify_password
from complaintdesk.models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: Role = Role.USER,
) -> User:
    """Create a user. Raises ConflictError if the email is already registered."""
    email = normalize_email(email)
    if db.query(User).filter(User.email == email).first() is not None:
        raise ConflictError("User already exists")

    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=Role(role).value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent signup for the same email.
        db.rollback()
        raise ConflictError("User already exists") from e
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; unknown email and wrong password look the same."""
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected")
        raise UnauthenticatedError("Invalid credentials")
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
