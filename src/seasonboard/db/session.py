"""Database session management.

seasonboard keeps every league/season record in one SQLite file under the
configured data directory. The engine is process-wide: the CLI initializes it
once per command, the API once at startup.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

_engine: Engine | None = None
_SessionFactory: sessionmaker | None = None


def get_engine() -> Engine:
    """Get the database engine (must call init_db first)."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _engine


def init_db(db_path: Path) -> Engine:
    """Open the scoreboard database, creating the scoreboards table if needed.

    Calling it again (another config, another test) replaces the engine.

    Args:
        db_path: Path to SQLite database file; its directory is created

    Returns:
        SQLAlchemy engine
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    _engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        # FastAPI runs sync dependencies in a threadpool, so a session may be
        # used on a different thread than the one that opened the connection
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(_engine)

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    return _engine


def reset_engine() -> None:
    """Reset the global engine (for testing)."""
    global _engine, _SessionFactory
    if _engine:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


def get_session() -> Generator[Session, None, None]:
    """Yield a session per request (for use with FastAPI Depends)."""
    if _SessionFactory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    session = _SessionFactory()
    try:
        yield session
    finally:
        session.close()


def create_session() -> Session:
    """Create a database session directly (for the CLI).

    Remember to close the session when done!
    """
    if _SessionFactory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _SessionFactory()
