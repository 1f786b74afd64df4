"""Pytest fixtures for mailconfig.

Provides reusable test fixtures for:
- Database session on an in-memory SQLite database
- Users (a superuser and two ordinary users) with one token each
- A domain owned by an ordinary user
- Test clients authenticated with those tokens

Usage:
    def test_list_domains(alice_client, example_domain):
        response = alice_client.get("/api/domain/list")
        assert response.status_code == 200
"""

import os

# Must be set before mailconfig is imported: the module-level engine is built
# from DATABASE_URL at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mailconfig.auth.identity import Identity
from mailconfig.database import get_db
from mailconfig.main import app
from mailconfig.models import Base, MailAuthToken, MailDomain, MailUser


ROOT_TOKEN = "root-token-0000000000000000000000"
ALICE_TOKEN = "alice-token-000000000000000000000"
BOB_TOKEN = "bob-token-00000000000000000000000"


# Single shared connection so every session sees the same in-memory database
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(test_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


def _create_user(db_session: Session, username: str, token: str, superuser: bool = False) -> MailUser:
    user = MailUser(username=username, superuser=superuser)
    db_session.add(user)
    db_session.flush()
    db_session.add(MailAuthToken(mailuser=user.id, token=token, label=f"{username}-cli"))
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def root_user(db_session: Session) -> MailUser:
    """Create a superuser."""
    return _create_user(db_session, "root", ROOT_TOKEN, superuser=True)


@pytest.fixture(scope="function")
def alice(db_session: Session) -> MailUser:
    """Create an ordinary user who owns example.com."""
    return _create_user(db_session, "alice", ALICE_TOKEN)


@pytest.fixture(scope="function")
def bob(db_session: Session) -> MailUser:
    """Create an ordinary user with no domains."""
    return _create_user(db_session, "bob", BOB_TOKEN)


@pytest.fixture(scope="function")
def example_domain(db_session: Session, alice: MailUser) -> MailDomain:
    domain = MailDomain(owner=alice.id, domainname="example.com")
    db_session.add(domain)
    db_session.commit()
    db_session.refresh(domain)
    return domain


@pytest.fixture(scope="function")
def root_identity(root_user: MailUser) -> Identity:
    return Identity(token=ROOT_TOKEN, user_id=root_user.id, username="root", is_superuser=True)


@pytest.fixture(scope="function")
def alice_identity(alice: MailUser) -> Identity:
    return Identity(token=ALICE_TOKEN, user_id=alice.id, username="alice", is_superuser=False)


@pytest.fixture(scope="function")
def bob_identity(bob: MailUser) -> Identity:
    return Identity(token=BOB_TOKEN, user_id=bob.id, username="bob", is_superuser=False)


def _make_client(db_session: Session, token: Optional[str] = None) -> TestClient:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    if token is not None:
        client.headers = {"Authorization": f"Bearer {token}"}
    return client


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create an unauthenticated test client."""
    yield _make_client(db_session)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def root_client(db_session: Session, root_user: MailUser) -> Generator[TestClient, None, None]:
    """Create a test client authenticated as the superuser."""
    yield _make_client(db_session, ROOT_TOKEN)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def alice_client(db_session: Session, alice: MailUser) -> Generator[TestClient, None, None]:
    """Create a test client authenticated as alice."""
    yield _make_client(db_session, ALICE_TOKEN)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def bob_client(db_session: Session, bob: MailUser) -> Generator[TestClient, None, None]:
    """Create a test client authenticated as bob."""
    yield _make_client(db_session, BOB_TOKEN)
    app.dependency_overrides.clear()
