"""Shared route dependencies: the session-cookie authorization guard and collaborators."""

from collections.abc import Callable
from typing import Annotated

from fastapi import BackgroundTasks, Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from complaintdesk.core.config import get_settings, settings
from complaintdesk.core.database import get_db
from complaintdesk.core.security import ANY_ROLE, Role, TokenClaims, authorize
from complaintdesk.services.lifecycle import ComplaintLifecycle
from complaintdesk.services.notifications import NotificationDispatcher

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def require_roles(allowed_roles: frozenset[Role]) -> Callable[..., TokenClaims]:
    """
    Build a dependency that admits only callers whose session role is in allowed_roles.

    Raises UnauthenticatedError (401) for a missing or invalid cookie and
    ForbiddenError (403) for a disallowed role, before the route body runs.
    """

    def guard(token: Annotated[str | None, Depends(session_cookie)]) -> TokenClaims:
        return authorize(token, allowed_roles)

    return guard


AnyCaller = Annotated[TokenClaims, Depends(require_roles(ANY_ROLE))]


def get_dispatcher() -> NotificationDispatcher:
    """Dependency: notification dispatcher built from current settings."""
    return NotificationDispatcher.from_settings(get_settings())


def get_lifecycle(
    db: Annotated[Session, Depends(get_db)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
    background_tasks: BackgroundTasks,
) -> ComplaintLifecycle:
    """Dependency: lifecycle controller whose notifications run after the response."""
    return ComplaintLifecycle(db, dispatcher, background_tasks.add_task)
