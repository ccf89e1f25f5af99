"""Command: show what the index stores for a note."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pkmindex.commands._base import PkmCommand
from pkmindex.services.query import QueryService

if TYPE_CHECKING:
    from pkmindex.commands._context import AppContext


@click.command(
    cls=PkmCommand,
    examples="""\
  pkmindex show notes/intro.typ
  pkmindex -v show notes/intro.typ
  pkmindex --json show notes/intro.typ""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def show(app: AppContext, path: Path) -> None:
    """Show stored metadata, wikilinks and labels for PATH."""
    app.emit(QueryService(app.workspace).get_file(path.absolute()))
