"""Request/response schemas and enumerations for complaints."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from complaintdesk.models import Complaint


class ComplaintCategory(StrEnum):
    PRODUCT = "Product"
    SERVICE = "Service"
    SUPPORT = "Support"


class ComplaintPriority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ComplaintStatus(StrEnum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class ComplaintCreate(BaseModel):
    """
    Body of POST /complaints.

    Any JSON value is accepted here; presence, type, length and enum checks
    all happen in the repository so that every violated field is reported
    together. Any owner value sent by the client is ignored.
    """

    title: Any = None
    description: Any = None
    category: Any = None
    priority: Any = None


class ComplaintUpdate(BaseModel):
    """Body of PUT /complaints/{id}; only fields that are sent are applied."""

    title: Any = None
    description: Any = None
    category: Any = None
    priority: Any = None
    status: Any = None
    admin_notes: Any = None


class ComplaintOwner(BaseModel):
    """Owner identity joined into admin listings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class ComplaintOut(BaseModel):
    """A complaint as returned to clients."""

    id: int
    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority
    status: ComplaintStatus
    admin_notes: str | None = None
    owner: int = Field(description="Owning user id")
    owner_info: ComplaintOwner | None = Field(
        default=None, description="Owner name and email (admin listings only)"
    )
    date_submitted: datetime
    updated_at: datetime


def complaint_to_out(complaint: Complaint, include_owner: bool = False) -> ComplaintOut:
    """Build the client view of a Complaint row; owner_info only when requested."""
    owner_info = None
    if include_owner and complaint.owner is not None:
        owner_info = ComplaintOwner.model_validate(complaint.owner)
    return ComplaintOut(
        id=complaint.id,
        title=complaint.title,
        description=complaint.description,
        category=complaint.category,
        priority=complaint.priority,
        status=complaint.status,
        admin_notes=complaint.admin_notes,
        owner=complaint.owner_id,
        owner_info=owner_info,
        date_submitted=complaint.date_submitted,
        updated_at=complaint.updated_at,
    )


class ComplaintListResponse(BaseModel):
    """Response for GET /complaints."""

    complaints: list[ComplaintOut]
