"""Core app configuration and database."""

from complaintdesk.core.config import get_settings, settings
from complaintdesk.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
