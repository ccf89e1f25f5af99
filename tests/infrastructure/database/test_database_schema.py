"""Tests for table and index definitions."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine

from pkmindex.infrastructure.database.schema import metadata_obj


@pytest.fixture
def engine() -> Iterator[Engine]:
    eng = create_engine("sqlite:///:memory:")
    metadata_obj.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


class TestSchema:
    def test_files_columns(self, engine: Engine) -> None:
        cols = {c["name"] for c in inspect(engine).get_columns("files")}
        assert cols == {"id", "path", "created_at", "modified_at", "last_parsed"}

    def test_wikilinks_columns(self, engine: Engine) -> None:
        cols = {c["name"] for c in inspect(engine).get_columns("wikilinks")}
        assert cols == {"id", "file_id", "target", "alias", "label", "line", "column"}

    def test_labels_columns(self, engine: Engine) -> None:
        cols = {c["name"] for c in inspect(engine).get_columns("labels")}
        assert cols == {"id", "file_id", "name", "line", "column", "is_implicit"}

    def test_metadata_columns(self, engine: Engine) -> None:
        cols = {c["name"] for c in inspect(engine).get_columns("metadata")}
        assert cols == {"id", "file_id", "key", "value"}

    def test_files_path_unique(self, engine: Engine) -> None:
        inspector = inspect(engine)
        unique_cols = [uc["column_names"] for uc in inspector.get_unique_constraints("files")]
        indexed_unique = [
            ix["column_names"] for ix in inspector.get_indexes("files") if ix.get("unique")
        ]
        assert ["path"] in unique_cols + indexed_unique

    @pytest.mark.parametrize(
        ("table", "column"),
        [
            ("files", "path"),
            ("metadata", "file_id"),
            ("wikilinks", "file_id"),
            ("wikilinks", "target"),
            ("labels", "file_id"),
            ("labels", "name"),
        ],
    )
    def test_lookup_indexes(self, engine: Engine, table: str, column: str) -> None:
        indexes = inspect(engine).get_indexes(table)
        assert any(ix["column_names"] == [column] for ix in indexes)
