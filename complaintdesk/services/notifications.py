"""Best-effort email notifications for complaint creation and status changes.

Delivery failures are logged and swallowed: a notification can never fail or
roll back the request that triggered it. There is no retry.
"""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from datetime import UTC, datetime
from email.message import EmailMessage
from enum import StrEnum
from html import escape
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from complaintdesk.core.config import Settings
    from complaintdesk.models import Complaint

logger = logging.getLogger(__name__)


class NotificationOutcome(StrEnum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ComplaintSnapshot:
    """Plain copy of a committed complaint, safe to use after the DB session closes."""

    id: int
    title: str
    description: str
    category: str
    priority: str
    status: str
    date_submitted: datetime | None

    @classmethod
    def from_model(cls, complaint: Complaint) -> ComplaintSnapshot:
        return cls(
            id=complaint.id,
            title=complaint.title,
            description=complaint.description,
            category=complaint.category,
            priority=complaint.priority,
            status=complaint.status,
            date_submitted=complaint.date_submitted,
        )


class Mailer(Protocol):
    def send(self, to: str, subject: str, text: str, html: str | None = None) -> None: ...


class SmtpMailer:
    """Sends one message per call over SMTP (STARTTLS and login when configured)."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = (
            settings.SMTP_PASSWORD.get_secret_value() if settings.SMTP_PASSWORD else None
        )
        self.from_email = settings.SMTP_FROM_EMAIL
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT_SEC

    @property
    def configured(self) -> bool:
        return bool(self.host)

    def build_message(
        self, to: str, subject: str, text: str, html: str | None = None
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.from_email
        message["To"] = to
        message.set_content(text)
        if html:
            message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> None:
        """Raises smtplib.SMTPException or OSError on delivery failure."""
        message = self.build_message(to, subject, text, html)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.send_message(message)


def _format_ts(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def _html_rows(title: str, rows: list[tuple[str, str]]) -> str:
    body = "".join(
        f"<p><strong>{escape(label)}:</strong> {escape(value)}</p>" for label, value in rows
    )
    return f"<h2>{escape(title)}</h2>{body}"


def _text_rows(title: str, rows: list[tuple[str, str]]) -> str:
    lines = [f"{title}:"] + [f"{label}: {value}" for label, value in rows]
    return "\n".join(lines) + "\n"


class NotificationDispatcher:
    """Formats complaint notifications and hands them to a Mailer for the operator address."""

    def __init__(self, mailer: Mailer | None, recipient: str | None) -> None:
        self.mailer = mailer
        self.recipient = recipient

    @classmethod
    def from_settings(cls, settings: Settings) -> NotificationDispatcher:
        mailer = SmtpMailer(settings)
        return cls(mailer if mailer.configured else None, settings.ADMIN_EMAIL)

    def notify_created(self, complaint: ComplaintSnapshot) -> NotificationOutcome:
        rows = [
            ("Title", complaint.title),
            ("Category", complaint.category),
            ("Priority", complaint.priority),
            ("Description", complaint.description),
            ("Date Submitted", _format_ts(complaint.date_submitted)),
        ]
        return self._dispatch(
            "New Complaint Submitted",
            _text_rows("New complaint submitted", rows),
            _html_rows("New Complaint Submitted", rows),
            complaint_id=complaint.id,
            kind="created",
        )

    def notify_status_changed(
        self, complaint: ComplaintSnapshot, previous_status: str
    ) -> NotificationOutcome:
        rows = [
            ("Title", complaint.title),
            ("Old Status", previous_status),
            ("New Status", complaint.status),
            ("Date Updated", _format_ts(datetime.now(UTC))),
        ]
        return self._dispatch(
            "Complaint Status Updated",
            _text_rows("Complaint status updated", rows),
            _html_rows("Complaint Status Updated", rows),
            complaint_id=complaint.id,
            kind="status_changed",
            old_status=previous_status,
            new_status=complaint.status,
        )

    def _dispatch(
        self, subject: str, text: str, html: str, **log_extra: str | int
    ) -> NotificationOutcome:
        if not self.recipient:
            logger.warning("ADMIN_EMAIL not configured; notification skipped", extra=log_extra)
            return NotificationOutcome.SKIPPED
        if self.mailer is None:
            logger.warning("SMTP not configured; notification skipped", extra=log_extra)
            return NotificationOutcome.SKIPPED
        try:
            self.mailer.send(self.recipient, subject, text, html)
        except Exception:
            logger.exception("Notification delivery failed", extra=log_extra)
            return NotificationOutcome.FAILED
        logger.info("Notification sent", extra=log_extra)
        return NotificationOutcome.SENT
