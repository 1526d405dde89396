"""Shared helpers for tests: in-memory database, recording mailer, API client setup."""

import smtplib
import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from complaintdesk.api.deps import get_dispatcher
from complaintdesk.core.database import get_db
from complaintdesk.core.security import Role, TokenClaims
from complaintdesk.main import app
from complaintdesk.models import Base
from complaintdesk.services.notifications import NotificationDispatcher

OPERATOR_EMAIL = "ops@example.com"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database shared by every session from the factory."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def complaint_fields(**kwargs: object) -> dict[str, object]:
    """A valid create payload; override any field via kwargs."""
    fields: dict[str, object] = {
        "title": "Lost bag",
        "description": "My bag was lost during transfer at the airport.",
        "category": "Service",
        "priority": "High",
    }
    fields.update(kwargs)
    return fields


def caller(user_id: int, role: Role = Role.USER) -> TokenClaims:
    return TokenClaims(user_id=user_id, role=role)


class RecordingMailer:
    """Mailer double: records every send attempt, optionally failing each one."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict[str, str | None]] = []

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> None:
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})
        if self.fail:
            raise smtplib.SMTPException("connection refused")


class ApiTestCase(unittest.TestCase):
    """Runs the real app against a private in-memory database and a recording mailer."""

    mailer_fails = False

    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        self.mailer = RecordingMailer(fail=self.mailer_fails)
        self.dispatcher = NotificationDispatcher(self.mailer, OPERATOR_EMAIL)

        def override_get_db() -> Generator[Session, None, None]:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_dispatcher] = lambda: self.dispatcher

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def new_client(self) -> TestClient:
        return TestClient(app)

    def signup(
        self,
        name: str,
        email: str,
        role: str | None = None,
        password: str = "correct-horse",
    ) -> tuple[TestClient, int]:
        """Register a user and return a client holding their session cookie, plus their id."""
        client = self.new_client()
        body: dict[str, str] = {"name": name, "email": email, "password": password}
        if role:
            body["role"] = role
        resp = client.post("/api/auth/signup", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return client, resp.json()["user"]["id"]

    def subjects(self) -> list[str | None]:
        return [m["subject"] for m in self.mailer.sent]
