"""BaseService and the exception → error-code mapping shared by services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pkmindex.domain.errors import (
    InvalidPathError,
    MetadataParseError,
    MetadataToolError,
    MetadataToolNotFoundError,
    OutOfScopeError,
    PkmIndexError,
)
from pkmindex.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from pkmindex.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)

# Most specific first: MetadataToolNotFoundError subclasses MetadataToolError.
_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (OutOfScopeError, "OUT_OF_SCOPE"),
    (InvalidPathError, "INVALID_PATH"),
    (MetadataToolNotFoundError, "METADATA_TOOL_NOT_FOUND"),
    (MetadataToolError, "METADATA_TOOL_FAILED"),
    (MetadataParseError, "METADATA_PARSE_ERROR"),
    (OSError, "IO_ERROR"),
    (UnicodeDecodeError, "IO_ERROR"),
)

# Exceptions a service turns into a failed ServiceResult; anything else propagates.
HANDLED_ERRORS: tuple[type[Exception], ...] = (PkmIndexError, OSError, UnicodeDecodeError)


def error_code(exc: Exception) -> str:
    """Map an exception raised by the parsing/index layers to an error code."""
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return "INTERNAL_ERROR"


class BaseService:
    """Base for service classes; holds the workspace."""

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _fail(op: str, exc: Exception, path: Path | None = None) -> ServiceResult:
        detail = {"path": str(path)} if path is not None else {}
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, error_code(exc), str(exc), **detail)
