"""Command: drop a note from the index."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pkmindex.commands._base import PkmCommand
from pkmindex.services.indexing import IndexService

if TYPE_CHECKING:
    from pkmindex.commands._context import AppContext


@click.command(cls=PkmCommand, examples="  pkmindex remove notes/old.typ")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def remove(app: AppContext, path: Path) -> None:
    """Remove PATH and its links and labels from the index."""
    app.emit(IndexService(app.workspace).remove(path.absolute()))
