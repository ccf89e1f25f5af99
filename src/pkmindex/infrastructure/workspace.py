"""Workspace — wires settings, parser, metadata tool and index together.

Constructed once per CLI invocation from :class:`PkmSettings`; services
receive it through :class:`BaseService`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pkmindex.config.logging import bind_workspace
from pkmindex.domain.parser import NoteParser
from pkmindex.infrastructure.filesystem import find_note_files
from pkmindex.infrastructure.index import Index
from pkmindex.infrastructure.metadata_tool import (
    MetadataExtractor,
    NullMetadataExtractor,
    TypstQueryExtractor,
)

if TYPE_CHECKING:
    from pathlib import Path

    from pkmindex.config.settings import PkmSettings

logger = logging.getLogger(__name__)


def build_extractor(settings: PkmSettings) -> MetadataExtractor:
    """Pick the metadata extractor described by ``[metadata]``."""
    cfg = settings.metadata
    if not cfg.enabled:
        return NullMetadataExtractor()
    return TypstQueryExtractor(cfg.command, root=settings.root, timeout=cfg.timeout)


class Workspace:
    """One notes root with its index and parser."""

    def __init__(
        self,
        settings: PkmSettings,
        *,
        extractor: MetadataExtractor | None = None,
    ) -> None:
        self._settings = settings
        self._index = Index.open(settings.root)
        self._parser = NoteParser(extractor or build_extractor(settings))
        bind_workspace(self._index.root)
        logger.debug("Opened workspace at %s", self._index.root)

    @property
    def root(self) -> Path:
        return self._index.root

    @property
    def settings(self) -> PkmSettings:
        return self._settings

    @property
    def index(self) -> Index:
        return self._index

    @property
    def parser(self) -> NoteParser:
        return self._parser

    def find_notes(self) -> list[Path]:
        """Every note file under the root, honoring ``[index]`` settings."""
        cfg = self._settings.index
        return find_note_files(self.root, extensions=cfg.extensions, skip_dirs=cfg.skip_dirs)

    def close(self) -> None:
        self._index.close()
