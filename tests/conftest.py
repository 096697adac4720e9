# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from plaza.core.security import create_access_token
from plaza.db.session import Base
from plaza.db.session import get_db as app_get_session
from plaza.main import app as fastapi_app
from plaza.models import Post, User
from plaza.repositories import UserRepository
from plaza.services import ModerationService

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Services commit per document, so clean tables explicitly between tests.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users without paying for password hashing."""

    def _make_user(username: str, email: str | None = None, image: str | None = None) -> User:
        return UserRepository(db_session).create(
            username=username,
            email=email or f"{username.lower()}@example.com",
            password_hash="not-a-real-hash",
            image=image or f"https://img.example.com/{username.lower()}.png",
        )

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    """Primary author used across tests."""
    return make_user("Alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    """Second user; acts as moderator for Alice's posts."""
    return make_user("Bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    """Third user for graph and reaction tests."""
    return make_user("Carol")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for any user."""
    return auth_headers


@pytest.fixture()
def alice_auth(alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_auth(bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def carol_auth(carol: User) -> dict[str, str]:
    return auth_headers(carol)


@pytest.fixture()
def pending_post(db_session: Session, alice: User) -> Post:
    """A post by Alice that has not been moderated."""
    return ModerationService(db_session).submit(alice.id, "Pending post by Alice")


@pytest.fixture()
def approved_post(db_session: Session, alice: User, bob: User) -> Post:
    """A post by Alice approved by Bob."""
    service = ModerationService(db_session)
    post = service.submit(alice.id, "Approved post by Alice")
    return service.approve(bob.id, post.id)
