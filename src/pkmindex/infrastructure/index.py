"""Index — persistent store of parsed notes with link queries.

Every write replaces all rows belonging to one file inside a single
``engine.begin()`` transaction: readers observe either the previous
state or the new one, never a mix. Reads always go back to the database;
nothing is cached in memory.

Backward links resolve by name. A link ``[[foo]]`` targets every indexed
file whose stem is ``foo``, whatever directory it lives in.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from pkmindex.domain.errors import InvalidPathError
from pkmindex.domain.models import Label, Metadata, ParsedFile, Wikilink
from pkmindex.infrastructure.database.engine import init_database
from pkmindex.infrastructure.database.schema import file_metadata, files, labels, wikilinks
from pkmindex.infrastructure.filesystem import relative_key

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_WIKILINK_COLUMNS = (
    wikilinks.c.target,
    wikilinks.c.alias,
    wikilinks.c.label,
    wikilinks.c.line,
    wikilinks.c["column"],
)


def _row_to_wikilink(row: Row[Any]) -> Wikilink:
    target, alias, label, line, column = tuple(row)[-5:]
    return Wikilink(target=target, label=label, alias=alias, line=line, column=column)


def _file_times(path: Path) -> tuple[int | None, int]:
    """Return ``(created, modified)`` epoch seconds for *path*.

    Birth time is only reported on some platforms; elsewhere it is None.
    """
    st = path.stat()
    birth = getattr(st, "st_birthtime", None)
    created = int(birth) if birth is not None else None
    return created, int(st.st_mtime)


def _metadata_rows(file_id: int, metadata: Metadata) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    if metadata.title is not None:
        rows.append({"file_id": file_id, "key": "title", "value": metadata.title})
    rows.extend({"file_id": file_id, "key": "tags", "value": tag} for tag in metadata.tags)
    rows.extend({"file_id": file_id, "key": "alias", "value": a} for a in metadata.alias)
    rows.extend(
        {"file_id": file_id, "key": key, "value": json.dumps(value)}
        for key, value in metadata.custom.items()
    )
    return rows


class Index:
    """Link index for one workspace root.

    Usage::

        index = Index.open(root)
        index.store(path, parser.parse_file(path))
        index.get_backward_links(path)
    """

    def __init__(self, root: Path, engine: Engine) -> None:
        self._root = root
        self._engine = engine
        self._write_lock = threading.Lock()

    @classmethod
    def open(cls, root: Path) -> Index:
        """Open (creating if needed) the store under *root*. Idempotent."""
        resolved = root.resolve()
        return cls(resolved, init_database(resolved))

    @property
    def root(self) -> Path:
        """The resolved workspace root."""
        return self._root

    @property
    def engine(self) -> Engine:
        return self._engine

    def close(self) -> None:
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Path helpers
    # ------------------------------------------------------------------

    def relative(self, path: Path) -> str:
        """Root-relative key for *path*; raises OutOfScopeError outside the root."""
        return relative_key(self._root, path)

    def absolute(self, key: str) -> Path:
        return self._root / key

    @staticmethod
    def _file_id(conn: Connection, key: str) -> int | None:
        return conn.execute(select(files.c.id).where(files.c.path == key)).scalar_one_or_none()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def store(self, path: Path, parsed: ParsedFile) -> None:
        """Replace everything stored for *path* with *parsed*.

        The file row is upserted (its id survives); metadata, wikilinks
        and labels are deleted and re-inserted. All of it commits or
        rolls back together.

        Raises:
            OutOfScopeError: *path* is outside the workspace root.
            OSError: *path* cannot be stat'ed.
        """
        key = self.relative(path)
        created, modified = _file_times(self.absolute(key))
        now = int(time.time())

        with self._write_lock, self._engine.begin() as conn:
            upsert = sqlite_insert(files).values(
                path=key, created_at=created, modified_at=modified, last_parsed=now
            )
            conn.execute(
                upsert.on_conflict_do_update(
                    index_elements=[files.c.path],
                    set_={
                        "created_at": upsert.excluded.created_at,
                        "modified_at": upsert.excluded.modified_at,
                        "last_parsed": upsert.excluded.last_parsed,
                    },
                )
            )
            file_id = self._file_id(conn, key)
            assert file_id is not None

            self._delete_related(conn, file_id)

            meta_rows = _metadata_rows(file_id, parsed.metadata)
            if meta_rows:
                conn.execute(insert(file_metadata), meta_rows)
            if parsed.wikilinks:
                conn.execute(
                    insert(wikilinks),
                    [
                        {
                            "file_id": file_id,
                            "target": w.target,
                            "alias": w.alias,
                            "label": w.label,
                            "line": w.line,
                            "column": w.column,
                        }
                        for w in parsed.wikilinks
                    ],
                )
            if parsed.labels:
                conn.execute(
                    insert(labels),
                    [
                        {
                            "file_id": file_id,
                            "name": lbl.name,
                            "line": lbl.line,
                            "column": lbl.column,
                            "is_implicit": lbl.is_implicit,
                        }
                        for lbl in parsed.labels
                    ],
                )

        logger.debug(
            "Stored %s: %d metadata rows, %d wikilinks, %d labels",
            key,
            len(meta_rows),
            len(parsed.wikilinks),
            len(parsed.labels),
        )

    def remove(self, path: Path) -> bool:
        """Drop *path* and all its rows. Returns False if it was not indexed."""
        key = self.relative(path)
        with self._write_lock, self._engine.begin() as conn:
            file_id = self._file_id(conn, key)
            if file_id is None:
                return False
            self._delete_related(conn, file_id)
            conn.execute(delete(files).where(files.c.id == file_id))
        logger.debug("Removed %s from index", key)
        return True

    @staticmethod
    def _delete_related(conn: Connection, file_id: int) -> None:
        conn.execute(delete(file_metadata).where(file_metadata.c.file_id == file_id))
        conn.execute(delete(wikilinks).where(wikilinks.c.file_id == file_id))
        conn.execute(delete(labels).where(labels.c.file_id == file_id))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_file(self, path: Path) -> ParsedFile | None:
        """Rebuild the stored ParsedFile for *path*, or None if not indexed.

        All rows are read inside one transaction, so a concurrent store is
        seen either entirely or not at all. Custom metadata values that no
        longer decode as JSON are dropped.
        """
        key = self.relative(path)
        with self._engine.begin() as conn:
            file_id = self._file_id(conn, key)
            if file_id is None:
                return None

            metadata = Metadata()
            meta_rows = conn.execute(
                select(file_metadata.c.key, file_metadata.c.value)
                .where(file_metadata.c.file_id == file_id)
                .order_by(file_metadata.c.id)
            )
            for meta_key, value in meta_rows:
                if meta_key == "title":
                    metadata.title = value
                elif meta_key == "tags":
                    metadata.tags.append(value)
                elif meta_key == "alias":
                    metadata.alias.append(value)
                else:
                    try:
                        metadata.custom[meta_key] = json.loads(value)
                    except (TypeError, ValueError):
                        logger.debug("Dropping undecodable metadata %r for %s", meta_key, key)

            links = [
                _row_to_wikilink(row)
                for row in conn.execute(
                    select(*_WIKILINK_COLUMNS)
                    .where(wikilinks.c.file_id == file_id)
                    .order_by(wikilinks.c.id)
                )
            ]

            label_rows = conn.execute(
                select(labels.c.name, labels.c.line, labels.c["column"], labels.c.is_implicit)
                .where(labels.c.file_id == file_id)
                .order_by(labels.c.id)
            )
            anchors = [
                Label(name=name, line=line, column=column, is_implicit=bool(implicit))
                for name, line, column, implicit in label_rows
            ]

        return ParsedFile(
            path=self.absolute(key),
            metadata=metadata,
            wikilinks=links,
            labels=anchors,
        )

    def get_forward_links(self, path: Path) -> list[Wikilink]:
        """Wikilinks written in *path*, in document order; [] if not indexed."""
        key = self.relative(path)
        stmt = (
            select(*_WIKILINK_COLUMNS)
            .join(files, wikilinks.c.file_id == files.c.id)
            .where(files.c.path == key)
            .order_by(wikilinks.c.id)
        )
        with self._engine.connect() as conn:
            return [_row_to_wikilink(row) for row in conn.execute(stmt)]

    def get_backward_links(self, path: Path) -> list[tuple[Path, Wikilink]]:
        """Every stored wikilink whose target equals the stem of *path*.

        Each result is paired with the absolute path of the file containing
        it, ordered by that path and then by document order.

        Raises:
            InvalidPathError: *path* has no stem to match against.
        """
        self.relative(path)
        stem = Path(path).stem
        if not stem:
            msg = f"Invalid file name: {path}"
            raise InvalidPathError(msg)

        stmt = (
            select(files.c.path, *_WIKILINK_COLUMNS)
            .select_from(wikilinks)
            .join(files, wikilinks.c.file_id == files.c.id)
            .where(wikilinks.c.target == stem)
            .order_by(files.c.path, wikilinks.c.id)
        )
        with self._engine.connect() as conn:
            return [(self.absolute(row[0]), _row_to_wikilink(row)) for row in conn.execute(stmt)]

    def get_all_metadata(self) -> list[tuple[str, str, str]]:
        """``(relative_path, key, value)`` for every metadata row in the index."""
        stmt = (
            select(files.c.path, file_metadata.c.key, file_metadata.c.value)
            .select_from(file_metadata)
            .join(files, file_metadata.c.file_id == files.c.id)
            .order_by(files.c.path, file_metadata.c.key, file_metadata.c.id)
        )
        with self._engine.connect() as conn:
            return [(path, key, value) for path, key, value in conn.execute(stmt)]

    def indexed_paths(self) -> list[Path]:
        """Absolute paths of every indexed file, sorted."""
        with self._engine.connect() as conn:
            keys = conn.execute(select(files.c.path).order_by(files.c.path)).scalars()
            return [self.absolute(k) for k in keys]
