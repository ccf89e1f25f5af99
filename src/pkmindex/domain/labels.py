"""Label extraction — explicit ``<anchors>`` and heading-derived anchors.

Typst headings (``= Intro``, ``== Details``) become implicit labels whose
name is a slug of the heading text: ``== API & Usage`` → ``api-usage``.
"""

from __future__ import annotations

import re

import regex

from pkmindex.domain.errors import PatternError
from pkmindex.domain.models import Label
from pkmindex.domain.text import iter_lines

EXPLICIT_LABEL_PATTERN = r"<([a-zA-Z0-9_:.-]+)>"
HEADING_PATTERN = r"^(=+)\s+(.+)$"

# Unicode Alphabetic (letters plus combining vowel signs) or any Number category.
_NON_SLUG_CHARS = regex.compile(r"[^\p{Alphabetic}\p{N}_-]")


def slugify_heading(text: str) -> str:
    """Turn heading text into a label name.

    Lowercases, maps every character that is neither Unicode Alphabetic
    nor Numeric, nor ``-`` or ``_``, to ``-``, then collapses runs of ``-`` and trims them from both
    ends. Returns an empty string when nothing survives.
    """
    mapped = _NON_SLUG_CHARS.sub("-", text.lower())
    return "-".join(part for part in mapped.split("-") if part)


class LabelParser:
    """Scans note text for explicit and implicit labels."""

    def __init__(
        self,
        label_pattern: str = EXPLICIT_LABEL_PATTERN,
        heading_pattern: str = HEADING_PATTERN,
    ) -> None:
        try:
            self._label_regex = re.compile(label_pattern)
            self._heading_regex = re.compile(heading_pattern)
        except re.error as exc:
            msg = f"Invalid label pattern: {exc}"
            raise PatternError(msg) from exc

    def parse(self, content: str) -> list[Label]:
        """Return labels in line order; explicit ones precede a line's heading label."""
        labels: list[Label] = []
        for line_no, line in iter_lines(content):
            for match in self._label_regex.finditer(line):
                labels.append(
                    Label(
                        name=match.group(1),
                        line=line_no,
                        column=match.start() + 1,
                        is_implicit=False,
                    )
                )

            heading = self._heading_regex.match(line)
            if heading is None:
                continue
            text = heading.group(2).strip()
            if not text:
                continue
            name = slugify_heading(text)
            if name:
                labels.append(Label(name=name, line=line_no, column=1, is_implicit=True))
        return labels


def extract_labels(content: str) -> list[Label]:
    """Convenience wrapper using the default patterns."""
    return LabelParser().parse(content)
