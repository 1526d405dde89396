"""SQLAlchemy ORM models."""

from complaintdesk.models.base import Base
from complaintdesk.models.complaint import Complaint
from complaintdesk.models.user import User

__all__ = ["Base", "Complaint", "User"]
