import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .logging_config import get_logger
from .models import Base

logger = get_logger(__name__)

# Global state for the open ledger
_current_engine: Engine | None = None
_current_session_factory: sessionmaker | None = None


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign keys for SQLite."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def open_ledger(db_url: str | Path) -> None:
    """
    Open a ledger database.

    Accepts a SQLAlchemy URL or a path to a SQLite file. Creates the tables if
    they don't exist.
    """
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        close_ledger()

    if isinstance(db_url, Path):
        db_url.parent.mkdir(parents=True, exist_ok=True)
        db_url = f"sqlite:///{db_url}"

    _current_engine = create_engine(db_url, echo=False)
    _current_session_factory = sessionmaker(bind=_current_engine)

    # Create tables if they don't exist
    Base.metadata.create_all(_current_engine)
    logger.info(f"Opened ledger {_current_engine.url}")


def use_engine(engine: Engine) -> None:
    """Serve sessions from an existing engine (tests, embedded callers)."""
    global _current_engine, _current_session_factory

    _current_engine = engine
    _current_session_factory = sessionmaker(bind=engine)
    Base.metadata.create_all(engine)


def close_ledger() -> None:
    """Close the current ledger."""
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        _current_engine.dispose()
        _current_engine = None
        _current_session_factory = None


def get_session() -> Session:
    """Get a database session for the current ledger."""
    if _current_session_factory is None:
        raise RuntimeError("No ledger is currently open")
    return _current_session_factory()


def get_db():
    """FastAPI dependency for database sessions."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def is_ledger_open() -> bool:
    """Check if a ledger is currently open."""
    return _current_engine is not None
