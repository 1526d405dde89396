"""ORM model for submitted complaints."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from complaintdesk.models.base import Base


class Complaint(Base):
    """
    One feedback record submitted by a user.

    owner_id is set at creation and never changed afterwards.
    """

    __tablename__ = "complaints"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(32), nullable=False, index=True)
    priority = Column(String(32), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="Pending", index=True)
    admin_notes = Column(Text, nullable=True)
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date_submitted = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    owner = relationship("User", back_populates="complaints")
