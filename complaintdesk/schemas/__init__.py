"""Pydantic request/response schemas."""

from complaintdesk.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserProfile,
)
from complaintdesk.schemas.complaints import (
    ComplaintCategory,
    ComplaintCreate,
    ComplaintListResponse,
    ComplaintOut,
    ComplaintOwner,
    ComplaintPriority,
    ComplaintStatus,
    ComplaintUpdate,
    complaint_to_out,
)
from complaintdesk.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "ComplaintCategory",
    "ComplaintCreate",
    "ComplaintListResponse",
    "ComplaintOut",
    "ComplaintOwner",
    "ComplaintPriority",
    "ComplaintStatus",
    "ComplaintUpdate",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "SignupRequest",
    "UserProfile",
    "complaint_to_out",
]
