"""Domain errors raised by services and mapped to HTTP responses in main.py."""

from dataclasses import dataclass


class ComplaintDeskError(Exception):
    """Base class for errors that carry a client-safe message and status code."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthenticatedError(ComplaintDeskError):
    """No session token, or the token is invalid or expired."""

    status_code = 401


class ForbiddenError(ComplaintDeskError):
    """Authenticated, but the role or ownership does not allow the action."""

    status_code = 403


class NotFoundError(ComplaintDeskError):
    """The referenced record does not exist."""

    status_code = 404


class ConflictError(ComplaintDeskError):
    """A unique field (e.g. email at signup) is already taken."""

    status_code = 400


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ComplaintValidationError(ComplaintDeskError):
    """One or more field constraints were violated; all violations are listed."""

    status_code = 400

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Validation failed for: {fields}")

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]
