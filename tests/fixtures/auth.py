"""Identities and HTTP clients for the three kinds of caller."""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from src.contacts.api.http.app import app
from src.contacts.api.http.deps import get_current_user, get_db_session
from src.contacts.core.services import DbSessionService
from src.contacts.entities.user import Role, User

__all__ = [
    "admin_user",
    "regular_user",
    "app_client",
    "client_as",
    "guest",
    "IDENTITIES",
]

# Fixture names for the callers that may manage contacts, plus a guest
IDENTITIES = ["admin_user", "regular_user", "guest"]


@pytest.fixture
def admin_user() -> User:
    """An administrator that only exists in memory."""
    return User(
        id="00000000-0000-4000-8000-00000000a001",
        email="admin@example.com",
        name="Ada Admin",
        role=Role.ADMIN,
    )


@pytest.fixture
def regular_user() -> User:
    return User(
        id="00000000-0000-4000-8000-00000000b002",
        email="user@example.com",
        name="Uma User",
        role=Role.USER,
    )


@pytest.fixture
def guest() -> None:
    return None


@pytest.fixture
def app_client(session: Session, engine: Engine) -> Generator[TestClient]:
    """Client bound to the test database, not following redirects."""

    def override_get_db_session():
        yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    try:
        with TestClient(app, follow_redirects=False) as test_client:
            app.state.app_dependencies.database_service = DbSessionService(engine=engine)
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client_as(app_client: TestClient) -> Callable[[User | None], TestClient]:
    """Return the client acting as ``identity`` (``None`` for a guest)."""

    def _as(identity: User | None) -> TestClient:
        app.dependency_overrides[get_current_user] = lambda: identity
        return app_client

    return _as
