"""Note discovery and workspace path handling.

The notes on disk are authoritative; the index is derived from them and
can always be rebuilt by re-parsing every file this module discovers.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pkmindex.domain.errors import OutOfScopeError


def relative_key(root: Path, path: Path) -> str:
    """Return *path* relative to *root* as a POSIX string.

    Relative *path* values are taken relative to *root*. Both sides are
    resolved first so symlinked temp dirs and ``..`` segments compare
    correctly.

    Raises:
        OutOfScopeError: If *path* does not lie under *root*.
    """
    candidate = path if path.is_absolute() else root / path
    resolved = candidate.resolve()
    try:
        rel = resolved.relative_to(root)
    except ValueError:
        raise OutOfScopeError(path, root) from None
    if not rel.parts:
        raise OutOfScopeError(path, root)
    return rel.as_posix()


def find_note_files(
    root: Path,
    *,
    extensions: Iterable[str] = (".typ",),
    skip_dirs: Iterable[str] = (),
) -> list[Path]:
    """Discover note files under *root*, sorted by path.

    Any file whose path (relative to *root*) passes through a directory
    named in *skip_dirs* is ignored.
    """
    exts = frozenset(extensions)
    skipped = frozenset(skip_dirs)
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix not in exts:
            continue
        if any(part in skipped for part in path.relative_to(root).parts[:-1]):
            continue
        results.append(path)
    return sorted(results)
