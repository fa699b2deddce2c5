"""Pytest configuration and fixtures."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["USE_MOCK_AI"] = "true"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-bytes"
os.environ["PASSWORD_PEPPER"] = ""

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tenx_cards import models  # noqa: E402
from tenx_cards.core import container  # noqa: E402
from tenx_cards.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from tenx_cards.domain.common.value_objects import UserId  # noqa: E402
from tenx_cards.domain.identity.entities.user import User  # noqa: E402
from tenx_cards.infrastructure.identity.dependencies import get_current_user  # noqa: E402
from tenx_cards.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"  # noqa: S105

# Single shared connection so the app's worker threads see the same database
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


def _create_user(db_session: Session, email: str) -> models.User:
    hashed_password = container.password_service().hash_password(TEST_PASSWORD)
    user = models.User(email=email, hashed_password=hashed_password)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    return _create_user(db_session, "test@example.com")


@pytest.fixture
def other_user(db_session: Session) -> models.User:
    return _create_user(db_session, "other@example.com")


def _as_domain(user: models.User) -> User:
    return User.create_with_id(
        id=UserId(user.id),
        email=user.email,
        hashed_password=user.hashed_password,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@pytest.fixture
def anon_client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Test client with the real authentication dependency."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(
    db_session: Session, test_user: models.User
) -> Generator[TestClient, Any, None]:
    """Test client signed in as ``test_user``."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    domain_user = _as_domain(test_user)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: domain_user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
