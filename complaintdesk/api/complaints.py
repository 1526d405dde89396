"""Complaint endpoints. Visibility and mutation rights depend on the caller's role and ownership."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from complaintdesk.api.deps import AnyCaller, get_lifecycle
from complaintdesk.schemas.auth import MessageResponse
from complaintdesk.schemas.complaints import (
    ComplaintCreate,
    ComplaintListResponse,
    ComplaintOut,
    ComplaintUpdate,
    complaint_to_out,
)
from complaintdesk.services.lifecycle import ComplaintLifecycle

router = APIRouter()

Lifecycle = Annotated[ComplaintLifecycle, Depends(get_lifecycle)]


@router.get("", response_model=ComplaintListResponse)
def list_complaints(caller: AnyCaller, lifecycle: Lifecycle) -> ComplaintListResponse:
    """
    Admins see every complaint with the owner's name and email;
    users see only the complaints they submitted.
    """
    complaints = lifecycle.list_for(caller)
    return ComplaintListResponse(
        complaints=[complaint_to_out(c, include_owner=caller.is_admin) for c in complaints]
    )


@router.post("", response_model=ComplaintOut, status_code=status.HTTP_201_CREATED)
def create_complaint(
    body: ComplaintCreate, caller: AnyCaller, lifecycle: Lifecycle
) -> ComplaintOut:
    """Submit a complaint owned by the caller. The operator is notified by email."""
    complaint = lifecycle.create(caller, body.model_dump())
    return complaint_to_out(complaint)


@router.get("/{complaint_id}", response_model=ComplaintOut)
def get_complaint(complaint_id: int, caller: AnyCaller, lifecycle: Lifecycle) -> ComplaintOut:
    complaint = lifecycle.get(caller, complaint_id)
    return complaint_to_out(complaint, include_owner=caller.is_admin)


@router.put("/{complaint_id}", response_model=ComplaintOut)
def update_complaint(
    complaint_id: int,
    body: ComplaintUpdate,
    caller: AnyCaller,
    lifecycle: Lifecycle,
) -> ComplaintOut:
    """
    Apply a partial update. Users may edit only their own complaints; admins may
    edit any, and an admin status change emails the operator.
    """
    complaint = lifecycle.update(caller, complaint_id, body.model_dump(exclude_unset=True))
    return complaint_to_out(complaint, include_owner=caller.is_admin)


@router.delete("/{complaint_id}", response_model=MessageResponse)
def delete_complaint(
    complaint_id: int, caller: AnyCaller, lifecycle: Lifecycle
) -> MessageResponse:
    lifecycle.delete(caller, complaint_id)
    return MessageResponse(message="Complaint deleted")
