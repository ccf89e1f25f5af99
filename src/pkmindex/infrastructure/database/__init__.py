"""SQLite engine and schema via SQLAlchemy Core."""

from pkmindex.infrastructure.database.engine import DB_FILENAME, create_db_engine, init_database
from pkmindex.infrastructure.database.schema import (
    file_metadata,
    files,
    labels,
    metadata_obj,
    wikilinks,
)

__all__ = [
    "DB_FILENAME",
    "create_db_engine",
    "file_metadata",
    "files",
    "init_database",
    "labels",
    "metadata_obj",
    "wikilinks",
]
