"""
Database session management for bucketsh.

Provides the engine/session factory for a store file.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .models import Base

# Session factory for the most recently opened store
_SessionFactory: Optional[sessionmaker] = None
_engine: Optional[Engine] = None


def init_db(db_path: Path, timeout: float = 1.0, echo: bool = False) -> Engine:
    """
    Initialize the store database and create all tables.

    Args:
        db_path: Path to the SQLite store file
        timeout: Seconds to wait for a lock held by another process
        echo: If True, log all SQL statements (debug mode)

    Returns:
        SQLAlchemy engine
    """
    global _engine, _SessionFactory

    db_url = f'sqlite:///{Path(db_path)}'

    _engine = create_engine(db_url, echo=echo, connect_args={'timeout': timeout})

    # Enable foreign keys for SQLite, and take over transaction control
    # from pysqlite so SAVEPOINTs work and BEGIN is emitted by us
    @event.listens_for(_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Take the write lock when the transaction starts, not at the first write
    @event.listens_for(_engine, "begin")
    def begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    try:
        Base.metadata.create_all(_engine)
    except Exception:
        close_db(_engine)
        raise

    _SessionFactory = sessionmaker(bind=_engine)

    return _engine


def get_session() -> Session:
    """
    Get a new database session.

    Returns:
        SQLAlchemy session

    Raises:
        RuntimeError: If database not initialized
    """
    if _SessionFactory is None:
        raise RuntimeError(
            "Database not initialized. Call init_db() first."
        )
    return _SessionFactory()


def close_db(engine: Optional[Engine] = None):
    """Close database connection and cleanup.

    Args:
        engine: Engine to dispose (default: the most recently initialized one)
    """
    global _engine, _SessionFactory

    engine = engine or _engine
    if engine is not None:
        engine.dispose()

    if engine is _engine:
        _engine = None
        _SessionFactory = None
