"""External metadata extraction via ``typst query``.

The tool is invoked once per file::

    typst query <file> metadata --field value --one

and prints the note's ``#metadata(...)`` value as a JSON object. A non-zero
exit means the document declined (no metadata element, compile error) and
degrades to empty Metadata; a missing executable is reported distinctly.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from pkmindex.domain.errors import MetadataToolError, MetadataToolNotFoundError
from pkmindex.domain.metadata import parse_metadata_json
from pkmindex.domain.models import Metadata

logger = logging.getLogger(__name__)


class MetadataExtractor(Protocol):
    """Anything that can produce Metadata for a note path."""

    def extract(self, path: Path) -> Metadata: ...


class NullMetadataExtractor:
    """Extractor that never reports metadata."""

    def extract(self, path: Path) -> Metadata:
        return Metadata()


class TypstQueryExtractor:
    """Runs ``typst query`` as a subprocess and parses its JSON output."""

    def __init__(
        self,
        command: str = "typst",
        *,
        root: Path | None = None,
        timeout: float | None = None,
    ) -> None:
        self._command = command
        self._root = root
        self._timeout = timeout

    def _argv(self, path: Path) -> list[str]:
        argv = [self._command, "query"]
        if self._root is not None:
            argv += ["--root", str(self._root)]
        argv += [str(path), "metadata", "--field", "value", "--one"]
        return argv

    def extract(self, path: Path) -> Metadata:
        """Return metadata for *path*.

        Raises:
            MetadataToolNotFoundError: The executable does not exist.
            MetadataToolError: The executable could not be run or timed out.
            MetadataParseError: The tool succeeded but printed malformed JSON.
        """
        try:
            proc = subprocess.run(
                self._argv(path),
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            msg = f"{self._command} command not found"
            raise MetadataToolNotFoundError(msg) from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            msg = f"Failed to execute {self._command} query: {exc}"
            raise MetadataToolError(msg) from exc

        if proc.returncode != 0:
            logger.debug(
                "%s query declined for %s (exit %d): %s",
                self._command,
                path,
                proc.returncode,
                proc.stderr.strip(),
            )
            return Metadata()

        return parse_metadata_json(proc.stdout)
