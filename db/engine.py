"""
db/engine.py -- The process-wide persistence handle.

One Database is created in the FastAPI lifespan before the app accepts
requests and disposed on shutdown. Stores receive it through their
constructor; nothing reaches for a module-level connection.

SQLite specifics (the dev and test backend):
  - check_same_thread=False: route handlers run on threadpool workers, and
    the pool may hand a connection created on one thread to another.
  - PRAGMA journal_mode=WAL: readers do not block during writes.
  - PRAGMA foreign_keys=ON: SQLite ignores ON DELETE CASCADE without it.
Both PRAGMAs are set per-connection because SQLite does not persist them.

Usage:
    database = Database("sqlite:///autogiro.db")
    database.create_all()
    users = UserStore(database)
    database.close()
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from db.schema import metadata

logger = logging.getLogger("autogiro.db")


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the SQLAlchemy Engine for the lifetime of the process."""

    def __init__(self, url: str) -> None:
        connect_args: dict = {}
        is_sqlite = url.startswith("sqlite")
        if is_sqlite:
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine: Engine = create_engine(url, connect_args=connect_args, pool_pre_ping=not is_sqlite)
        if is_sqlite:
            event.listen(self.engine, "connect", _set_sqlite_pragmas)

    def create_all(self) -> None:
        """Create missing tables. Existing tables are left untouched, so this is safe on every startup."""
        metadata.create_all(self.engine)
        logger.info("Schema verified (%s)", self.engine.url.render_as_string(hide_password=True))

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False
        return True

    def close(self) -> None:
        self.engine.dispose()
