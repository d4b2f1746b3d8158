"""Database initialization and session management.

Provides engine construction, table creation and session helpers for the
taskboard schema.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from .config import TaskboardSettings, get_settings
from .schemas.database import Task, User


logger = logging.getLogger(__name__)


def build_engine(settings: TaskboardSettings | None = None) -> Engine:
    """Create a SQLAlchemy engine from settings."""
    settings = settings or get_settings()
    return create_engine(settings.database.url, **settings.get_database_config())


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Get the process wide engine, built on first use."""
    return build_engine()


def create_db_and_tables(engine: Engine | None = None) -> None:
    """Create all tables.

    Safe to call multiple times - only creates tables that don't exist.
    """
    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.info(f"Database initialized at: {engine.url}")


def get_sync_session(engine: Engine | None = None) -> Session:
    """Get a synchronous database session.

    Returns:
        SQLModel Session for database operations

    """
    return Session(engine or get_engine())


@contextmanager
def get_session_context(engine: Engine | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Usage:
        with get_session_context() as session:
            # Use session here
            pass

    """
    session = Session(engine or get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def verify_database(engine: Engine | None = None) -> dict[str, int]:
    """Count rows per table, raising if the schema is unusable."""
    with get_session_context(engine) as session:
        counts = {
            "users": len(session.exec(select(User.id)).all()),
            "tasks": len(session.exec(select(Task.id)).all()),
        }
    logger.debug(f"Database verification counts: {counts}")
    return counts


__all__ = [
    "build_engine",
    "create_db_and_tables",
    "get_engine",
    "get_session_context",
    "get_sync_session",
    "verify_database",
]
