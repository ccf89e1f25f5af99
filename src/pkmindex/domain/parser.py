"""NoteParser — runs both scanners and attaches metadata.

The metadata extractor is injected so tests (and workspaces with metadata
disabled) can substitute a fake for the ``typst`` subprocess.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pkmindex.domain.errors import MetadataToolError
from pkmindex.domain.labels import LabelParser
from pkmindex.domain.models import Metadata, ParsedFile
from pkmindex.domain.wikilinks import WikilinkParser

if TYPE_CHECKING:
    from pkmindex.infrastructure.metadata_tool import MetadataExtractor

logger = logging.getLogger(__name__)


class NoteParser:
    """Produces a :class:`ParsedFile` from a note's text or path."""

    def __init__(self, extractor: MetadataExtractor | None = None) -> None:
        self._wikilinks = WikilinkParser()
        self._labels = LabelParser()
        self._extractor = extractor

    def parse_content(
        self,
        content: str,
        path: Path,
        metadata: Metadata | None = None,
    ) -> ParsedFile:
        """Parse in-memory *content*; no file or subprocess access."""
        return ParsedFile(
            path=path,
            metadata=metadata if metadata is not None else Metadata(),
            wikilinks=self._wikilinks.parse(content),
            labels=self._labels.parse(content),
        )

    def parse_file(
        self,
        path: Path,
        *,
        tool_errors: list[MetadataToolError] | None = None,
    ) -> ParsedFile:
        """Read *path* and parse it, asking the extractor for metadata.

        A metadata tool that is missing or cannot run leaves the metadata
        empty; the error is appended to *tool_errors* when given. Read
        errors and malformed tool output propagate to the caller.
        """
        content = path.read_text(encoding="utf-8")
        metadata = self._extract(path, tool_errors)
        parsed = self.parse_content(content, path, metadata)
        logger.debug(
            "Parsed %s: %d wikilinks, %d labels",
            path,
            len(parsed.wikilinks),
            len(parsed.labels),
        )
        return parsed

    def _extract(self, path: Path, tool_errors: list[MetadataToolError] | None) -> Metadata:
        if self._extractor is None:
            return Metadata()
        try:
            return self._extractor.extract(path)
        except MetadataToolError as exc:
            logger.debug("No metadata for %s: %s", path, exc)
            if tool_errors is not None:
                tool_errors.append(exc)
            return Metadata()
