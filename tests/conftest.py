import os

# Settings are read at import time; provide test values before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-stack-assist")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from stack_assist.config import settings
from stack_assist.core.exceptions import EmailDeliveryException
from stack_assist.core.mailer import get_mail_sender
from stack_assist.database import get_db
from stack_assist.models.base import Base
# Import FastAPI app (and with it every model) before creating tables
from stack_assist.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret-pass"


class RecordingMailSender:
    """Mail sender that records messages instead of talking SMTP"""

    def __init__(self):
        self.sent: list[dict] = []
        self.fail_for: set[str] = set()
        self.fail_subjects_containing: str | None = None

    async def send(self, to, subject, text, html=None, from_name=None):
        if to in self.fail_for or (
            self.fail_subjects_containing and self.fail_subjects_containing in subject
        ):
            raise EmailDeliveryException("SMTP error: connection refused")
        self.sent.append(
            {"to": to, "subject": subject, "text": text, "html": html, "from_name": from_name}
        )

    def to(self, address: str) -> list[dict]:
        return [m for m in self.sent if m["to"] == address]


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mail_sender():
    return RecordingMailSender()


@pytest.fixture(scope="function")
def client(db_session, mail_sender):
    """FastAPI test client with test database and recording mail sender"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(
    identity_id: str = "1", session_id: str | None = "unknown-session", expired: bool = False
) -> str:
    """
    Generate a JWT token for testing.

    Args:
        identity_id: Value of the 'sub' claim
        session_id: Value of the 'sid' claim (omitted when None)
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": identity_id, "exp": exp, "iat": datetime.now(UTC)}
    if session_id is not None:
        payload["sid"] = session_id

    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_owner(client, email: str, company_name: str = "Acme Agency") -> dict:
    """Register an owner through the API and return auth headers"""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": PASSWORD, "company_name": company_name},
    )
    assert response.status_code == 201, response.text
    return bearer(response.json()["access_token"])


def login(client, email: str, password: str = PASSWORD) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return bearer(response.json()["access_token"])


def add_team_member(client, owner_headers: dict, email: str, permissions: dict | None = None) -> dict:
    """
    Invite a member, set their password and log them in.

    Returns:
        Auth headers of the now active member
    """
    from stack_assist.core.security import create_password_setup_token

    body = {"email": email, "name": "Team Member"}
    if permissions is not None:
        body["permissions"] = permissions
    response = client.post("/api/team/members", json=body, headers=owner_headers)
    assert response.status_code == 201, response.text

    response = client.post(
        "/api/auth/password-setup/confirm",
        json={"token": create_password_setup_token(email), "password": PASSWORD},
    )
    assert response.status_code == 200, response.text
    return login(client, email)


def full_permissions() -> dict:
    return {
        "can_create": True,
        "can_edit": True,
        "can_delete": True,
        "modules": {
            "clients": True,
            "sites": True,
            "hosting": True,
            "mobile_apps": True,
            "developer_accounts": True,
            "tasks": True,
        },
    }


@pytest.fixture
def owner_a_headers(client):
    """Authorization headers for tenant A's owner"""
    return register_owner(client, "owner-a@example.com", "Agency A")


@pytest.fixture
def owner_b_headers(client):
    """Authorization headers for tenant B's owner"""
    return register_owner(client, "owner-b@example.com", "Agency B")
