"""SQLite engine and session management for the Aisle repositories."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from aisle.config import get_settings
from aisle.db.models import Base

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None
logger = logging.getLogger(__name__)


def _sqlite_url(db_path: Path) -> str:
    return f"sqlite:///{db_path}"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ARG001
    # ON DELETE CASCADE / SET NULL on items and products only fire with this pragma.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_path: Path | None = None) -> Engine:
    """Return the process-wide engine, creating the database file and schema on first use."""
    global _engine, _session_factory

    if _engine is not None:
        return _engine

    db_path = Path(database_path or get_settings().database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(_sqlite_url(db_path), future=True, echo=False)
    event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(engine)

    _engine = engine
    _session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    logger.debug(
        "SQLite database ready at %s with tables %s",
        db_path,
        ", ".join(sorted(Base.metadata.tables)),
    )
    return engine


def get_session() -> Session:
    """Return a new SQLAlchemy session bound to the shared engine."""

    if _session_factory is None:
        get_engine()
    assert _session_factory is not None  # for mypy
    return _session_factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Run one mutation atomically: commit on success, roll back on any error."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_repository_state() -> None:
    """Dispose the shared engine so the next call reopens ``Settings.database_path``."""

    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = ["get_engine", "get_session", "session_scope", "reset_repository_state"]
