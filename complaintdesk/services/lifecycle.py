"""Complaint lifecycle: role-scoped visibility, ownership checks and notification triggers."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from complaintdesk.core.errors import ForbiddenError
from complaintdesk.core.security import TokenClaims
from complaintdesk.models import Complaint
from complaintdesk.services.complaints import ComplaintRepository
from complaintdesk.services.notifications import ComplaintSnapshot, NotificationDispatcher

logger = logging.getLogger(__name__)

# Launches a fire-and-forget task, e.g. BackgroundTasks.add_task.
Scheduler = Callable[..., Any]


def _run_created(dispatcher: NotificationDispatcher, snapshot: ComplaintSnapshot) -> None:
    try:
        dispatcher.notify_created(snapshot)
    except Exception:
        logger.exception("Creation notification task crashed", extra={"complaint_id": snapshot.id})


def _run_status_changed(
    dispatcher: NotificationDispatcher, snapshot: ComplaintSnapshot, previous_status: str
) -> None:
    try:
        dispatcher.notify_status_changed(snapshot, previous_status)
    except Exception:
        logger.exception(
            "Status notification task crashed", extra={"complaint_id": snapshot.id}
        )


class ComplaintLifecycle:
    """
    Orchestrates complaint operations for one authenticated caller.

    Callers are assumed to have passed the authorization guard already.
    Ownership policy is the same for read, update and delete: a missing id is
    NotFound, an existing complaint owned by someone else is Forbidden for
    non-admins. Notifications are scheduled only after the change commits.
    """

    def __init__(
        self,
        session: Session,
        dispatcher: NotificationDispatcher,
        schedule: Scheduler,
    ) -> None:
        self.repo = ComplaintRepository(session)
        self.dispatcher = dispatcher
        self.schedule = schedule

    def _check_owner(self, caller: TokenClaims, complaint: Complaint) -> None:
        if not caller.is_admin and complaint.owner_id != caller.user_id:
            raise ForbiddenError("You can only access your own complaints")

    def list_for(self, caller: TokenClaims) -> list[Complaint]:
        if caller.is_admin:
            return self.repo.list_all()
        return self.repo.list_by_owner(caller.user_id)

    def get(self, caller: TokenClaims, complaint_id: int) -> Complaint:
        complaint = self.repo.get_by_id(complaint_id)
        self._check_owner(caller, complaint)
        return complaint

    def create(self, caller: TokenClaims, fields: Mapping[str, Any]) -> Complaint:
        complaint = self.repo.create(fields, owner_id=caller.user_id)
        self.schedule(_run_created, self.dispatcher, ComplaintSnapshot.from_model(complaint))
        return complaint

    def update(
        self, caller: TokenClaims, complaint_id: int, fields: Mapping[str, Any]
    ) -> Complaint:
        complaint = self.repo.get_by_id(complaint_id)
        self._check_owner(caller, complaint)
        if "admin_notes" in fields and not caller.is_admin:
            raise ForbiddenError("Only administrators can edit admin notes")

        previous_status = complaint.status
        complaint = self.repo.update(complaint_id, fields)

        if caller.is_admin and complaint.status != previous_status:
            logger.info(
                "Complaint status changed by admin",
                extra={
                    "complaint_id": complaint.id,
                    "old_status": previous_status,
                    "new_status": complaint.status,
                },
            )
            self.schedule(
                _run_status_changed,
                self.dispatcher,
                ComplaintSnapshot.from_model(complaint),
                previous_status,
            )
        return complaint

    def delete(self, caller: TokenClaims, complaint_id: int) -> None:
        complaint = self.repo.get_by_id(complaint_id)
        self._check_owner(caller, complaint)
        self.repo.delete(complaint_id)
