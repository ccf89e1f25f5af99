"""Command group: forward and backward link queries."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pkmindex.commands._base import PkmGroup
from pkmindex.services.links import LinkService

if TYPE_CHECKING:
    from pkmindex.commands._context import AppContext

_PATH = click.Path(dir_okay=False, path_type=Path)


@click.group(
    cls=PkmGroup,
    examples="""\
  pkmindex links forward notes/intro.typ
  pkmindex links backward notes/intro.typ
  pkmindex --json links backward intro.typ""",
)
def links() -> None:
    """Query what a note links to, and what links to it."""


@links.command(
    examples="""\
  pkmindex links forward notes/intro.typ
  pkmindex -q links forward notes/intro.typ"""
)
@click.argument("path", type=_PATH)
@click.pass_obj
def forward(app: AppContext, path: Path) -> None:
    """List wikilinks written in PATH."""
    app.emit(LinkService(app.workspace).forward_links(path.absolute()))


@links.command(
    examples="""\
  pkmindex links backward notes/intro.typ
  pkmindex --json links backward intro.typ"""
)
@click.argument("path", type=_PATH)
@click.pass_obj
def backward(app: AppContext, path: Path) -> None:
    """List wikilinks in other notes that target PATH's name."""
    app.emit(LinkService(app.workspace).backward_links(path.absolute()))
