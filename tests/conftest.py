# tests/conftest.py
from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from safe_space.core.identity import IdentityVerifier
from safe_space.core.settings import Settings
from safe_space.db.session import Base, Database
from safe_space.db.time import utcnow
from safe_space.main import create_app
from safe_space.models import Comment, Post, UserRole

TEST_DB_URL = "sqlite://"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "database_url": TEST_DB_URL,
        "auth_jwt_secret": "test-jwt-secret",
        "auto_create_tables": False,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings shared by the default test application."""
    return make_settings()


@pytest.fixture(scope="session")
def database() -> Iterator[Database]:
    database = Database(TEST_DB_URL)
    database.create_tables()
    try:
        yield database
    finally:
        database.drop_tables()
        database.dispose()


@pytest.fixture(autouse=True)
def clean_tables(database: Database) -> Iterator[None]:
    yield
    # Each test sees an empty database even though requests commit.
    with database.engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app(test_settings: Settings, database: Database) -> FastAPI:
    return create_app(test_settings, database)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    # No lifespan: shutdown would dispose the shared in-memory engine.
    return TestClient(app, base_url="http://test")


@pytest.fixture(scope="session")
def verifier(test_settings: Settings) -> IdentityVerifier:
    return IdentityVerifier(test_settings)


@pytest.fixture()
def headers_for(verifier: IdentityVerifier) -> Callable[[str], dict[str, str]]:
    """Return a factory building bearer headers for a user id."""

    def _headers(user_id: str, **kwargs: object) -> dict[str, str]:
        token = verifier.issue_token(user_id, **kwargs)  # type: ignore[arg-type]
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def test_user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture()
def other_user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture()
def auth_token(headers_for, test_user_id: str) -> dict[str, str]:
    """Authorization header for the primary test user."""
    return headers_for(test_user_id)


@pytest.fixture()
def other_auth_token(headers_for, other_user_id: str) -> dict[str, str]:
    """Authorization header for the secondary test user."""
    return headers_for(other_user_id)


def _grant(db_session: Session, user_id: str, role: str) -> None:
    db_session.add(UserRole(user_id=user_id, role=role))
    db_session.commit()


@pytest.fixture()
def admin_token(db_session: Session, headers_for) -> dict[str, str]:
    """Authorization header for a user holding the admin role."""
    admin_id = str(uuid.uuid4())
    _grant(db_session, admin_id, "admin")
    return headers_for(admin_id)


@pytest.fixture()
def moderator_token(db_session: Session, headers_for) -> dict[str, str]:
    """Authorization header for a user holding the moderator role."""
    moderator_id = str(uuid.uuid4())
    _grant(db_session, moderator_id, "moderator")
    return headers_for(moderator_id)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts with explicit, ordered timestamps."""
    created: list[Post] = []

    def _make_post(owner_id: str | None = None, **fields: object) -> Post:
        base_time = utcnow() - timedelta(hours=1)
        values: dict[str, object] = {
            "title": f"Post {len(created) + 1}",
            "content": "Having a rough week and wanted to talk about it.",
            "category": "general",
            "user_id": owner_id,
            "status": "active",
            "created_at": base_time + timedelta(seconds=len(created)),
        }
        values.update(fields)
        post = Post(**values)
        db_session.add(post)
        db_session.commit()
        created.append(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post, test_user_id: str) -> Post:
    """A post owned by the primary test user."""
    return make_post(test_user_id, title="First post")


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    created: list[Comment] = []

    def _make_comment(post: Post, owner_id: str | None = None, **fields: object) -> Comment:
        base_time = utcnow() - timedelta(minutes=30)
        values: dict[str, object] = {
            "post_id": post.id,
            "content": "You are not alone.",
            "user_id": owner_id,
            "status": "active",
            "created_at": base_time + timedelta(seconds=len(created)),
        }
        values.update(fields)
        comment = Comment(**values)
        db_session.add(comment)
        db_session.commit()
        created.append(comment)
        return comment

    return _make_comment


@pytest.fixture()
def test_comment(make_comment, test_post: Post, test_user_id: str) -> Comment:
    """A comment on `test_post` owned by the primary test user."""
    return make_comment(test_post, test_user_id)
