"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired to
it, and a few ready-made users.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from datetime import datetime, timezone  # noqa: E402
from typing import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from coachbook.core.enums import UserType  # noqa: E402
from coachbook.core.security import create_access_token  # noqa: E402
from coachbook.database import Base, get_db, init_db  # noqa: E402
from coachbook.main import app  # noqa: E402
from coachbook.models import User  # noqa: E402
from coachbook.validation.dependencies import get_now, get_validation_gate  # noqa: E402
from coachbook.validation.gate import NullDiagnosticSink, ValidationGate  # noqa: E402

FIXED_NOW = datetime(2030, 1, 15, 12, 0, tzinfo=timezone.utc)
TEST_PASSWORD = "Secret123"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    """Create a new database session for each test."""
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with the test database and a frozen clock."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    app.dependency_overrides[get_validation_gate] = lambda: ValidationGate(NullDiagnosticSink())

    # Don't use context manager - the lifespan would touch the configured database
    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


def make_user(db: Session, email: str, user_type: str, **columns) -> User:
    user = User(name=columns.pop("name", "Test User"), email=email, user_type=user_type, **columns)
    user.set_password(TEST_PASSWORD)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers_for(user: User) -> dict:
    token = create_access_token({"sub": user.id, "role": user.user_type})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_candidate(db: Session) -> User:
    return make_user(db, "candidate@example.com", UserType.CANDIDATE.value, name="Casey Candidate")


@pytest.fixture
def test_expert(db: Session) -> User:
    return make_user(
        db,
        "expert@example.com",
        UserType.EXPERT.value,
        name="Erin Expert",
        hourly_rate=90,
        skills=["python", "system design"],
    )


@pytest.fixture
def test_admin(db: Session) -> User:
    return make_user(db, "admin@example.com", UserType.ADMIN.value, name="Ada Admin")


@pytest.fixture
def candidate_headers(test_candidate: User) -> dict:
    return auth_headers_for(test_candidate)


@pytest.fixture
def expert_headers(test_expert: User) -> dict:
    return auth_headers_for(test_expert)
