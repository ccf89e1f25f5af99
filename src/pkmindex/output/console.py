"""Rich Console factory and theme for pkmindex output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Without a terminal (tests, pipes) Rich drops colors.
Markup parsing is off: wikilinks like ``[[a|b]]`` must print verbatim.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PKM_THEME = Theme(
    {
        "pkm.ok": "bold green",
        "pkm.error": "bold red",
        "pkm.op": "bold cyan",
        "pkm.key": "dim",
        "pkm.path": "blue",
        "pkm.target": "bold",
        "pkm.pos": "dim",
        "pkm.implicit": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=PKM_THEME,
        no_color=no_color,
        highlight=False,
        markup=False,
        emoji=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
