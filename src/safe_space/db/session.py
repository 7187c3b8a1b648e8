"""Database engine and session wiring.

The engine is owned by an explicitly constructed `Database` object that the
application factory stores on `app.state`; request handlers receive sessions
through the `get_db` dependency rather than a module-level client.
"""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from safe_space.core.settings import Settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ANN001
    # SQLite only honours ON DELETE CASCADE with this pragma on every connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory for one backing store."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        """Create the engine for `url`.

        In-memory SQLite URLs share a single connection so every session sees
        the same data.
        """
        self.url = url
        kwargs: dict[str, object] = {}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        self.engine: Engine = create_engine(url, echo=echo, **kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        """Build a database from application settings."""
        return cls(settings.database_url, echo=settings.sql_debug)

    def session(self) -> Session:
        """Open a new session bound to this database."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        # Ensure model modules are imported so that metadata is populated.
        import safe_space.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
