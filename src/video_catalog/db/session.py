"""Database lifecycle management.

A Database is constructed explicitly from a URL and handed to whoever
needs it; there is no module-level engine. init() and dispose() bracket
its lifetime (the API app calls them from its lifespan handler).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from video_catalog.db.schema import Base

logger = logging.getLogger(__name__)


def _create_engine(url: str) -> Engine:
    """Create an engine, applying SQLite specifics when needed.

    Uses check_same_thread=False for SQLite so sessions can be used from
    FastAPI's threadpool, and StaticPool for in-memory databases so every
    session sees the same data.
    """
    parsed = make_url(url)

    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, echo=False, pool_pre_ping=True)

    kwargs: dict = {"echo": False, "connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    else:
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **kwargs)

    # Tag rows rely on ON DELETE CASCADE
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class Database:
    """Explicitly constructed store client.

    Example:
        db = Database("sqlite:///:memory:")
        db.init()
        with db.session_scope() as session:
            ...
        db.dispose()
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine: Engine = _create_engine(url)
        self._factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def init(self) -> None:
        """Create tables that do not exist yet."""
        Base.metadata.create_all(self.engine)
        logger.info(f"Database ready ({self.engine.url.render_as_string(hide_password=True)})")

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
        logger.info("Database connections released")

    def session(self) -> Session:
        """Get a new session. Caller is responsible for closing it."""
        return self._factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Context manager for sessions with automatic cleanup.

        Commits on successful exit, rolls back on exception, and always
        closes the session.
        """
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
