"""SQLAlchemy Core table definitions for the link index.

One ``files`` row per indexed note; ``metadata``, ``wikilinks`` and
``labels`` rows hang off it by ``file_id`` and are replaced wholesale
whenever the note is re-stored.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata_obj = MetaData()

files = Table(
    "files",
    metadata_obj,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("path", Text, nullable=False, unique=True),  # root-relative, POSIX
    Column("created_at", Integer),  # epoch seconds; NULL when the fs has no birth time
    Column("modified_at", Integer),
    Column("last_parsed", Integer),
)

file_metadata = Table(
    "metadata",
    metadata_obj,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("file_id", Integer, ForeignKey("files.id", ondelete="CASCADE"), nullable=False),
    Column("key", Text, nullable=False),
    Column("value", Text),  # custom keys hold JSON
)

wikilinks = Table(
    "wikilinks",
    metadata_obj,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("file_id", Integer, ForeignKey("files.id", ondelete="CASCADE"), nullable=False),
    Column("target", Text, nullable=False),
    Column("alias", Text),
    Column("label", Text),
    Column("line", Integer),
    Column("column", Integer),
)

labels = Table(
    "labels",
    metadata_obj,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("file_id", Integer, ForeignKey("files.id", ondelete="CASCADE"), nullable=False),
    Column("name", Text, nullable=False),
    Column("line", Integer),
    Column("column", Integer),
    Column("is_implicit", Boolean, default=False, server_default="0"),
)

# ---------------------------------------------------------------------------
# Lookup indexes
# ---------------------------------------------------------------------------

Index("idx_files_path", files.c.path)
Index("idx_metadata_file_id", file_metadata.c.file_id)
Index("idx_wikilinks_file_id", wikilinks.c.file_id)
Index("idx_wikilinks_target", wikilinks.c.target)
Index("idx_labels_file_id", labels.c.file_id)
Index("idx_labels_name", labels.c.name)
