"""
Database configuration and session management.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger("foodcatalog.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _configure_sqlite(engine: Engine) -> None:
    """
    Make pysqlite behave like a regular transactional driver.

    pysqlite opens transactions lazily and commits on its own around
    SAVEPOINT, which breaks nested transactions. The driver is switched to
    autocommit mode and BEGIN is emitted by SQLAlchemy instead. Foreign keys
    are off by default in SQLite and need to be enabled per connection.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL, applying SQLite specifics when needed."""
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, future=True, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # A single shared connection, otherwise each checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, echo=echo, future=True, **kwargs)
    _configure_sqlite(engine)
    return engine


# Create engine
engine = create_db_engine(settings.database_url, echo=settings.db_echo)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database(bind: Optional[Engine] = None):
    """Initialize database schema"""
    target = bind if bind is not None else engine
    with target.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")
