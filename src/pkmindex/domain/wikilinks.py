"""Wikilink extraction.

Recognized forms, each confined to a single line::

    [[target]]
    [[target|alias]]
    [[target:label]]
    [[target:label|alias]]

Targets are taken verbatim: relative paths, extensions and mixed case are
not normalized or validated.
"""

from __future__ import annotations

import re

from pkmindex.domain.errors import PatternError
from pkmindex.domain.models import Wikilink
from pkmindex.domain.text import iter_lines

# target excludes | ] : and newline; label and alias exclude | ] and newline.
WIKILINK_PATTERN = r"\[\[([^|\]:\n]+)(?::([^|\]\n]+))?(?:\|([^|\]\n]+))?\]\]"


class WikilinkParser:
    """Scans note text for wikilinks, line by line."""

    def __init__(self, pattern: str = WIKILINK_PATTERN) -> None:
        try:
            self._regex = re.compile(pattern)
        except re.error as exc:
            msg = f"Invalid wikilink pattern {pattern!r}: {exc}"
            raise PatternError(msg) from exc

    def parse(self, content: str) -> list[Wikilink]:
        """Return every wikilink in *content* in order of appearance.

        Never raises: text without matches simply yields an empty list.
        """
        wikilinks: list[Wikilink] = []
        for line_no, line in iter_lines(content):
            for match in self._regex.finditer(line):
                wikilinks.append(
                    Wikilink(
                        target=match.group(1),
                        label=match.group(2),
                        alias=match.group(3),
                        line=line_no,
                        column=match.start() + 1,
                    )
                )
        return wikilinks


def extract_wikilinks(content: str) -> list[Wikilink]:
    """Convenience wrapper using the default pattern."""
    return WikilinkParser().parse(content)
