"""Database engine setup for SQLite with WAL mode.

The index lives in a single file, ``{root}/.pkm-cache.db``. WAL lets
readers keep seeing the last committed state while a store is in flight.

pysqlite only issues ``BEGIN`` ahead of DML, so a run of SELECTs would
each read a fresh snapshot. The driver's own transaction handling is
switched off and SQLAlchemy emits ``BEGIN`` itself whenever a
transaction starts; every ``engine.begin()`` block, reads included, then
sees one consistent snapshot.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from pkmindex.infrastructure.database.schema import metadata_obj

DB_FILENAME = ".pkm-cache.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN")

    return engine


def init_database(root: Path) -> Engine:
    """Open or create the index database under *root*.

    Creates all tables and lookup indexes that don't exist yet.
    Idempotent — safe to call on an existing store.
    """
    engine = create_db_engine(root / DB_FILENAME)
    metadata_obj.create_all(engine)
    return engine
