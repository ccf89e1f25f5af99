"""QueryService — stored-file retrieval and metadata listing.

Read-only; every call goes straight to the index.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from pkmindex.services.base import HANDLED_ERRORS, BaseService
from pkmindex.services.contracts import MetadataListData, ParsedFileData, dump_validated
from pkmindex.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path


class QueryService(BaseService):
    """Inspect what the index holds."""

    def get_file(self, path: Path) -> ServiceResult:
        """Return the stored ParsedFile for *path* (``NOT_FOUND`` if unindexed)."""
        op = "get_file"
        try:
            parsed = self._workspace.index.get_file(path)
        except HANDLED_ERRORS as exc:
            return self._fail(op, exc, path)
        if parsed is None:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"File not indexed: {path}", path=str(path)
            )
        data = asdict(parsed)
        data["path"] = str(parsed.path)
        return ServiceResult(ok=True, op=op, data=dump_validated(ParsedFileData, data))

    def list_metadata(self) -> ServiceResult:
        """Every metadata row in the index, ordered by path then key."""
        rows = [
            {"path": path, "key": key, "value": value}
            for path, key, value in self._workspace.index.get_all_metadata()
        ]
        return ServiceResult(
            ok=True,
            op="list_metadata",
            data=dump_validated(MetadataListData, {"count": len(rows), "items": rows}),
        )
