"""Line splitting shared by the scanners."""

from __future__ import annotations

from collections.abc import Iterator


def iter_lines(content: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs, 1-based.

    Lines break on ``\\n`` only, with one trailing ``\\r`` removed, so form
    feeds and other Unicode separators stay inside a line and line numbers
    agree with what editors display.
    """
    for idx, line in enumerate(content.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        yield idx, line
