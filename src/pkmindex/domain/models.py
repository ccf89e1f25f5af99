"""Records produced by the parsing layer and consumed by the index."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Wikilink:
    """A ``[[target:label|alias]]`` occurrence in note text."""

    target: str
    label: str | None = None
    alias: str | None = None
    line: int = 1  # 1-based
    column: int = 1  # 1-based, in characters


@dataclass(frozen=True)
class Label:
    """An addressable anchor: explicit ``<name>`` or derived from a heading."""

    name: str
    line: int = 1
    column: int = 1
    is_implicit: bool = False


@dataclass
class Metadata:
    """Front-matter fields reported by the external metadata tool.

    ``custom`` holds every key other than ``title``, ``tags`` and ``alias``
    with its JSON value untouched.
    """

    title: str | None = None
    tags: list[str] = field(default_factory=list)
    alias: list[str] = field(default_factory=list)
    custom: dict[str, Any] = field(default_factory=dict)


@dataclass
class ParsedFile:
    """Everything extracted from one note; the unit of storage."""

    path: Path
    metadata: Metadata = field(default_factory=Metadata)
    wikilinks: list[Wikilink] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)
