"""Complaint persistence: validated CRUD over the complaints table."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session, joinedload

from complaintdesk.core.errors import ComplaintValidationError, FieldError, NotFoundError
from complaintdesk.models import Complaint
from complaintdesk.schemas.complaints import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
)

logger = logging.getLogger(__name__)

TITLE_MIN_LEN = 1
TITLE_MAX_LEN = 100
DESCRIPTION_MIN_LEN = 10
DESCRIPTION_MAX_LEN = 500
ADMIN_NOTES_MAX_LEN = 1000

# Fields a client may write, in the order violations are reported.
EDITABLE_FIELDS = ("title", "description", "category", "priority", "status", "admin_notes")
REQUIRED_ON_CREATE = ("title", "description", "category", "priority")

_ENUMS: dict[str, type[ComplaintCategory | ComplaintPriority | ComplaintStatus]] = {
    "category": ComplaintCategory,
    "priority": ComplaintPriority,
    "status": ComplaintStatus,
}
_LENGTHS = {
    "title": (TITLE_MIN_LEN, TITLE_MAX_LEN),
    "description": (DESCRIPTION_MIN_LEN, DESCRIPTION_MAX_LEN),
}


def _normalize(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Keep editable fields only and trim string values."""
    out: dict[str, Any] = {}
    for name in EDITABLE_FIELDS:
        if name in fields:
            value = fields[name]
            out[name] = value.strip() if isinstance(value, str) else value
    return out


def validate_complaint_fields(
    fields: Mapping[str, Any], partial: bool = False
) -> list[FieldError]:
    """
    Check presence, type, length and enum membership; return every violation.

    With partial=False the four user-supplied fields are required. With
    partial=True only the fields present are checked.
    """
    errors: list[FieldError] = []
    if not partial:
        for name in REQUIRED_ON_CREATE:
            if fields.get(name) is None:
                errors.append(FieldError(name, f"{name} is required"))

    for name, value in fields.items():
        if value is None:
            if name == "admin_notes" or not partial:
                continue
            errors.append(FieldError(name, f"{name} must not be null"))
            continue
        if not isinstance(value, str):
            errors.append(FieldError(name, f"{name} must be a string"))
            continue
        if name in _LENGTHS:
            lo, hi = _LENGTHS[name]
            if not (lo <= len(value) <= hi):
                errors.append(
                    FieldError(name, f"{name} must be between {lo} and {hi} characters")
                )
        elif name in _ENUMS:
            allowed = [m.value for m in _ENUMS[name]]
            if value not in allowed:
                errors.append(FieldError(name, f"{name} must be one of: {', '.join(allowed)}"))
        elif name == "admin_notes":
            if len(value) > ADMIN_NOTES_MAX_LEN:
                errors.append(
                    FieldError(name, f"admin_notes must be at most {ADMIN_NOTES_MAX_LEN} characters")
                )
    return errors


class ComplaintRepository:
    """CRUD operations on complaints bound to one DB session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, fields: Mapping[str, Any], owner_id: int) -> Complaint:
        """Insert a complaint owned by owner_id with status Pending."""
        data = _normalize(fields)
        # Status and notes are server-controlled on creation.
        data.pop("status", None)
        data.pop("admin_notes", None)
        errors = validate_complaint_fields(data)
        if errors:
            raise ComplaintValidationError(errors)

        complaint = Complaint(
            **data,
            status=ComplaintStatus.PENDING.value,
            owner_id=owner_id,
        )
        self.session.add(complaint)
        self.session.commit()
        self.session.refresh(complaint)
        logger.info(
            "Complaint created",
            extra={"complaint_id": complaint.id, "owner_id": owner_id},
        )
        return complaint

    def list_all(self) -> list[Complaint]:
        """All complaints, newest first, with owners loaded."""
        return (
            self.session.query(Complaint)
            .options(joinedload(Complaint.owner))
            .order_by(Complaint.date_submitted.desc(), Complaint.id.desc())
            .all()
        )

    def list_by_owner(self, owner_id: int) -> list[Complaint]:
        return (
            self.session.query(Complaint)
            .filter(Complaint.owner_id == owner_id)
            .order_by(Complaint.date_submitted.desc(), Complaint.id.desc())
            .all()
        )

    def get_by_id(self, complaint_id: int) -> Complaint:
        complaint = self.session.get(Complaint, complaint_id)
        if complaint is None:
            raise NotFoundError("Complaint not found")
        return complaint

    def update(self, complaint_id: int, fields: Mapping[str, Any]) -> Complaint:
        """Merge the provided fields into an existing complaint. owner_id is never changed."""
        complaint = self.get_by_id(complaint_id)
        data = _normalize(fields)
        errors = validate_complaint_fields(data, partial=True)
        if errors:
            raise ComplaintValidationError(errors)

        for name, value in data.items():
            setattr(complaint, name, value)
        self.session.commit()
        self.session.refresh(complaint)
        logger.info(
            "Complaint updated",
            extra={"complaint_id": complaint.id, "updated_fields": sorted(data)},
        )
        return complaint

    def delete(self, complaint_id: int) -> None:
        complaint = self.get_by_id(complaint_id)
        self.session.delete(complaint)
        self.session.commit()
        logger.info("Complaint deleted", extra={"complaint_id": complaint_id})
