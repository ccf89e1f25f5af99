"""Command: parse notes into the index."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pkmindex.commands._base import PkmCommand
from pkmindex.services.indexing import IndexService

if TYPE_CHECKING:
    from pkmindex.commands._context import AppContext


@click.command(
    "index",
    cls=PkmCommand,
    examples="""\
  pkmindex index
  pkmindex index notes/intro.typ notes/other.typ
  pkmindex -v index""",
)
@click.argument("paths", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def index_cmd(app: AppContext, paths: tuple[Path, ...]) -> None:
    """Index PATHS, or rebuild the whole workspace when none are given."""
    svc = IndexService(app.workspace)
    if not paths:
        app.emit(svc.rebuild())
    elif len(paths) == 1:
        app.emit(svc.index_file(paths[0].absolute()))
    else:
        app.emit(svc.index_paths([p.absolute() for p in paths]))
