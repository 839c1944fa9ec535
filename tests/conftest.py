"""
Pytest configuration and shared fixtures.

Environment variables are set before anything under ``app`` is imported so
the settings object and the module-level engine pick them up.
"""

import datetime
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-unit-tests-only")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MAIL_SERVER", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.db import base as _models  # noqa: F401  (registers tables on SQLModel.metadata)
from app.core.security import TokenCodec, get_password_hash
from app.db.repositories import ResumeRepository, UserRepository
from app.db.session import get_db
from app.main import app
from app.models.user import AccountStatus, User

TEST_PASSWORD = "Sup3rSecret!"


class RecordingNotifier:
    """Stands in for EmailService; records calls instead of sending."""

    def __init__(self):
        self.verifications: list[tuple[str, str, str]] = []
        self.resets: list[tuple[str, str, str]] = []
        self.welcomes: list[tuple[str, str]] = []

    def send_verification(self, to: str, name: str, token: str) -> None:
        self.verifications.append((to, name, token))

    def send_password_reset(self, to: str, name: str, token: str) -> None:
        self.resets.append((to, name, token))

    def send_welcome(self, to: str, name: str) -> None:
        self.welcomes.append((to, name))

    def shutdown(self, wait: bool = True) -> None:
        pass

    @property
    def total(self) -> int:
        return len(self.verifications) + len(self.resets) + len(self.welcomes)


class FrozenClock:
    """Mutable aware-UTC clock for time-dependent tests."""

    def __init__(self, now: datetime.datetime):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + datetime.timedelta(**kwargs)


# ======================================================================
# Database
# ======================================================================


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def user_repository(session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def resume_repository(session) -> ResumeRepository:
    return ResumeRepository(session)


# ======================================================================
# Collaborators
# ======================================================================


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def token_codec() -> TokenCodec:
    return TokenCodec("unit-test-signing-key", expires_delta=datetime.timedelta(hours=24))


@pytest.fixture
def make_user(user_repository):
    """Factory persisting a user directly, bypassing registration."""

    def _make_user(email: str = "bob@example.com", password: str = TEST_PASSWORD, verified: bool = True,
                   **overrides) -> User:
        user = User(email=email, hashed_password=get_password_hash(password), first_name="Bob", last_name="Builder",
                    **overrides)
        if verified:
            user.mark_email_verified()
        return user_repository.save(user)

    return _make_user


@pytest.fixture
def verified_user(make_user) -> User:
    user = make_user()
    assert user.status == AccountStatus.ACTIVE
    return user


# ======================================================================
# HTTP
# ======================================================================


@pytest.fixture
def client(session, notifier):
    """Test client bound to the in-memory session and the recording notifier."""

    def override_get_db():
        yield session

    original_email_service = app.state.email_service
    app.dependency_overrides[get_db] = override_get_db
    app.state.email_service = notifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.state.email_service = original_email_service


@pytest.fixture
def auth_headers(verified_user):
    token = app.state.token_codec.issue(verified_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime.datetime(2026, 1, 15, 9, 30, 0, tzinfo=datetime.timezone.utc))
