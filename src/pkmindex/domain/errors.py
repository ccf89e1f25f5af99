"""Exception hierarchy shared by the parsing and index layers.

Services translate these into ``ServiceError`` codes; everything else
(``OSError``, SQLAlchemy errors) propagates uninterpreted.
"""

from __future__ import annotations

from pathlib import Path


class PkmIndexError(Exception):
    """Base class for all pkmindex errors."""


class PatternError(PkmIndexError):
    """A parser's matching pattern failed to compile."""


class OutOfScopeError(PkmIndexError):
    """A path given to the index does not lie under the workspace root."""

    def __init__(self, path: Path, root: Path) -> None:
        super().__init__(f"File {path} is not in workspace {root}")
        self.path = path
        self.root = root


class InvalidPathError(PkmIndexError):
    """A path has no file stem to match link targets against."""


class MetadataToolError(PkmIndexError):
    """The external metadata tool could not be executed."""


class MetadataToolNotFoundError(MetadataToolError):
    """The external metadata tool executable does not exist."""


class MetadataParseError(PkmIndexError):
    """The external metadata tool emitted malformed JSON."""
