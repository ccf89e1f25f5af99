"""IndexService — parse notes and keep the index in sync with them.

Files are truth: ``rebuild`` re-parses every note under the root and
drops index entries whose file has disappeared.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pkmindex.domain.errors import MetadataToolError
from pkmindex.services.base import HANDLED_ERRORS, BaseService, error_code
from pkmindex.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _problem(path: Path, exc: Exception) -> dict[str, str]:
    return {"path": str(path), "code": error_code(exc), "error": str(exc)}


def _warning(problem: dict[str, str]) -> str:
    return f"{problem['path']}: {problem['error']}"


class IndexService(BaseService):
    """Write-side operations: index, rebuild, remove."""

    def _store(self, path: Path) -> tuple[dict[str, int | str], list[dict[str, str]]]:
        """Parse and store one file.

        Returns the stored summary and any metadata-tool problems; the file
        is stored with empty metadata in that case. Other exceptions
        propagate.
        """
        key = self._workspace.index.relative(path)
        tool_errors: list[MetadataToolError] = []
        parsed = self._workspace.parser.parse_file(
            self._workspace.index.absolute(key), tool_errors=tool_errors
        )
        self._workspace.index.store(path, parsed)
        summary: dict[str, int | str] = {
            "path": key,
            "wikilinks": len(parsed.wikilinks),
            "labels": len(parsed.labels),
        }
        return summary, [_problem(path, exc) for exc in tool_errors]

    def index_file(self, path: Path) -> ServiceResult:
        """Parse *path* and replace its stored rows."""
        op = "index_file"
        try:
            summary, problems = self._store(path)
        except HANDLED_ERRORS as exc:
            return self._fail(op, exc, path)
        return ServiceResult(
            ok=True,
            op=op,
            data={**summary, "errors": problems},
            warnings=[_warning(p) for p in problems],
        )

    def index_paths(self, paths: list[Path]) -> ServiceResult:
        """Index several files; a failing file becomes a warning, not an abort."""
        return self._index_many("index", paths)

    def rebuild(self) -> ServiceResult:
        """Index every note under the root and prune entries for deleted files."""
        notes = self._workspace.find_notes()
        result = self._index_many("rebuild", notes)

        removed: list[str] = []
        for indexed in self._workspace.index.indexed_paths():
            if not indexed.exists():
                self._workspace.index.remove(indexed)
                removed.append(self._workspace.index.relative(indexed))
        if removed:
            logger.info("Pruned %d deleted files from index", len(removed))

        return result.model_copy(update={"data": {**result.data, "removed": removed}})

    def _index_many(self, op: str, paths: list[Path]) -> ServiceResult:
        indexed: list[dict[str, int | str]] = []
        errors: list[dict[str, str]] = []
        warnings: list[str] = []
        for path in paths:
            try:
                summary, problems = self._store(path)
            except HANDLED_ERRORS as exc:
                logger.warning("Failed to index %s: %s", path, exc)
                problems = [_problem(path, exc)]
            else:
                indexed.append(summary)
            errors.extend(problems)
            warnings.extend(_warning(p) for p in problems)
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(indexed), "items": indexed, "errors": errors},
            warnings=warnings,
        )

    def remove(self, path: Path) -> ServiceResult:
        """Drop *path* from the index. Unknown paths succeed with ``removed=False``."""
        op = "remove"
        try:
            removed = self._workspace.index.remove(path)
        except HANDLED_ERRORS as exc:
            return self._fail(op, exc, path)
        return ServiceResult(ok=True, op=op, data={"path": str(path), "removed": removed})
