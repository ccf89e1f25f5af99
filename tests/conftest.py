"""Shared pytest fixtures and test helpers for pkmindex tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkmindex.config.settings import PkmSettings
from pkmindex.domain.models import Metadata
from pkmindex.infrastructure.index import Index
from pkmindex.infrastructure.metadata_tool import NullMetadataExtractor
from pkmindex.infrastructure.workspace import Workspace


class FakeExtractor:
    """Metadata extractor returning canned values keyed by file name."""

    def __init__(self, by_name: dict[str, Metadata] | None = None) -> None:
        self.by_name = by_name or {}
        self.calls: list[Path] = []

    def extract(self, path: Path) -> Metadata:
        self.calls.append(path)
        return self.by_name.get(path.name, Metadata())


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def notes_root(tmp_path: Path) -> Path:
    """Resolved temporary workspace root."""
    return tmp_path.resolve()


@pytest.fixture
def index(notes_root: Path) -> Iterator[Index]:
    """Freshly opened index on an empty workspace."""
    idx = Index.open(notes_root)
    try:
        yield idx
    finally:
        idx.close()


@pytest.fixture
def workspace(notes_root: Path) -> Iterator[Workspace]:
    """Workspace with metadata extraction replaced by a no-op extractor."""
    settings = PkmSettings.from_cli(root=notes_root)
    ws = Workspace(settings, extractor=NullMetadataExtractor())
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_workspace(notes_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from inside a temp workspace with metadata disabled."""
    monkeypatch.chdir(notes_root)
    monkeypatch.setenv("PKMINDEX_METADATA__ENABLED", "false")
    monkeypatch.delenv("PKMINDEX_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def write_note(root: Path, rel: str, content: str) -> Path:
    """Write a note under *root*, creating directories; return its path."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
