"""Database handle and session management."""

from collections.abc import Iterator
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


# Base class for models
class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Database:
    """Owns the engine and session factory for one store.

    Created once per application and closed at shutdown; request handlers
    receive sessions through ``get_db`` instead of touching the engine.
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        self.url = url
        self.engine: Engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        """Open a new session."""
        return self.session_factory()

    def ping(self) -> bool:
        """Check that the store answers a trivial query."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency for the application's database handle."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
